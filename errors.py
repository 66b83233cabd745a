class MemorySimulatorError(Exception):
    pass


class ConfigurationError(MemorySimulatorError):
    pass


class NotInitializedError(MemorySimulatorError):
    def __init__(self, message="Memory has not been initialized"):
        super().__init__(message)


class CreationError(MemorySimulatorError):
    """Base class for every reason create_process can refuse a request."""


class InvalidProcessSizeError(CreationError):
    pass


class SizeExceedsLimitError(CreationError):
    pass


class InsufficientTotalMemoryError(CreationError):
    pass


class InsufficientFramesError(CreationError):
    # Enough frames exist in total, just not enough free right now
    pass


class RegistryFullError(CreationError):
    pass


class DuplicateProcessError(CreationError):
    pass


class ProcessNotFoundError(MemorySimulatorError):
    def __init__(self, process_id):
        super().__init__(f"Process {process_id} not found")
        self.process_id = process_id


class FrameReleaseError(MemorySimulatorError):
    pass


class AddressOutOfRangeError(MemorySimulatorError):
    pass
