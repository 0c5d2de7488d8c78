"""Plan module that fails while it is being executed."""

raise RuntimeError("registry unavailable")
