"""
Error types for the hidden-heaven tool.

Every error raised while processing a package derives from HiddenHeavenError,
so the orchestrator can attribute it to that package and keep going.
"""


class HiddenHeavenError(Exception):
    """Base class for all tool errors."""


class InvalidArgument(HiddenHeavenError, ValueError):
    """A caller passed something the engine cannot work with."""


class ManagedFolderCorrupted(HiddenHeavenError):
    """The link folder holds content this tool did not create."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MalformedSettings(HiddenHeavenError):
    """The editor settings file exists but cannot be used."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MissingLinkTarget(HiddenHeavenError):
    """
    An included item does not exist on disk at link time.

    Not raised by the engine: the dangling link is still created and an
    instance is returned as a warning.
    """

    def __init__(self, link_path, target_path):
        self.link_path = link_path
        self.target_path = target_path
        super().__init__(f"{link_path} -> {target_path} (target missing)")
