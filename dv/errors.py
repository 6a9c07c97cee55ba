# SPDX-License-Identifier: BUSL-1.1
"""Error types raised by dv library code.

Commands let these propagate; ``dv.cli.main`` reports them and exits.
"""


class DvError(Exception):
    """Base class for errors reported to the user."""


class ConfigurationError(DvError):
    """Bad environment override, unknown image name, or invalid config value."""


class FilesystemError(DvError):
    """Creating, reading, or writing a file under the config directory failed."""

    def __init__(self, msg: str, path=None):
        self.path = path
        super().__init__(msg)


class ContainerRuntimeError(DvError):
    """A docker invocation failed."""

    def __init__(self, msg: str, name: str = "", output: str = ""):
        self.name = name
        self.output = output
        if output:
            msg = f"{msg}\n{output.rstrip()}"
        super().__init__(msg)


class ResourceExhaustionError(DvError):
    """No free host port was found in the allowed range."""
