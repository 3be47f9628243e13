"""Domain-specific errors for ifnamectl."""


class IfnamectlError(Exception):
    """Base error for ifnamectl."""


class InputContractViolation(IfnamectlError):
    """Raised when the requested match/naming combination is invalid."""


class CardinalityMismatch(InputContractViolation):
    """Raised when the number of names does not fit the matched interfaces."""

    def __init__(self, macs: int, names: int, message: str = None):
        self.macs = macs
        self.names = names
        super().__init__(
            message
            or f"number of names ({names}) must match number of MAC addresses ({macs})"
        )


class MissingMatchCriterion(InputContractViolation):
    """Raised when no usable matching method was given."""


class MissingNamingStrategy(InputContractViolation):
    """Raised when neither names, a name policy nor a name prefix was given."""


class ConflictingOptions(InputContractViolation):
    """Raised when mutually exclusive options are combined."""


class ProbeError(IfnamectlError):
    """Raised when vendor/model detection for an interface fails."""

    def __init__(self, message: str, interface: str, node: str = None, output: str = ""):
        self.interface = interface
        self.node = node
        self.output = output
        super().__init__(message)


class NoMembersFound(IfnamectlError):
    """Raised when the cluster reports no nodes."""


class ClusterAccessError(IfnamectlError):
    """Raised when the cluster API cannot be reached or queried."""


class ReconcileError(IfnamectlError):
    """Raised when creating or updating the MachineConfig fails."""

    def __init__(self, message: str, name: str, status: int = None):
        self.name = name
        self.status = status
        super().__init__(message)


class RemoteLookupError(ReconcileError):
    """Raised when looking up an existing MachineConfig fails for a reason other than absence."""


class ConflictError(ReconcileError):
    """Raised when the server rejects an update because the resourceVersion is stale."""


class SerializationError(IfnamectlError):
    """Raised when a MachineConfig cannot be turned into a YAML document."""


EXIT_CODES = (
    (InputContractViolation, 2),
    (ProbeError, 3),
    (NoMembersFound, 4),
    (ClusterAccessError, 5),
    (RemoteLookupError, 5),
    (ReconcileError, 6),
    (SerializationError, 7),
)


def exit_code_for(error: IfnamectlError) -> int:
    """Map an error to the CLI exit status reported for it."""
    for error_type, code in EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return 1
