"""
⚠️ Errors
Exceptions raised by the genetic engine
"""


class GenOptError(Exception):
    """Base class for every error raised by genopt"""
    pass


class InvalidDomain(GenOptError, ValueError):
    """The domain's lower bound is above its upper bound"""
    pass


class InvalidWeights(GenOptError, ValueError):
    """Weights passed to weighted sampling cannot define a distribution"""
    pass


class OutOfRange(GenOptError, IndexError):
    """A count or a bit pattern falls outside what is allowed"""
    pass


class InvalidConfiguration(GenOptError, ValueError):
    """Optimizer parameters outside their valid ranges"""
    pass
