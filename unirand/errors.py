class UnirandError(Exception):
    """Base class for unirand-specific errors."""


# Caller contract violations
class InvalidRangeError(UnirandError, ValueError):
    pass


class NegativeCountError(UnirandError, ValueError):
    pass


class InvalidBitCountError(UnirandError, ValueError):
    pass


# Generator definition
class GeneratorDefinitionError(UnirandError, TypeError):
    pass


# Seeding
class EntropyUnavailableError(UnirandError):
    pass
