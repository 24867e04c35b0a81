"""Errors raised while aggregating links into records."""


class MissingSourceNodeError(LookupError):
    """A link names a source node that does not exist or is filtered out."""

    def __init__(self, source: str, target: str):
        super().__init__(f"No node found for {source} => {target}")
        self.source = source
        self.target = target


class MissingTargetNodeError(LookupError):
    """A fold function needed the target node of a link but it is absent."""

    def __init__(self, source: str, target: str):
        super().__init__(f"No target node for {source} => {target}")
        self.source = source
        self.target = target
