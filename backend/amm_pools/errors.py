"""Exceptions raised by AMM contract queries and local pool math."""


class AMMError(Exception):
    """Base class for failures talking to the AMM contract."""


class ContractIdError(AMMError, ValueError):
    """Contract identifier is malformed or does not map to an address."""


class ContractNotDeployedError(AMMError):
    """No contract implementing the AMM interface lives at the address."""


class ContractCallError(AMMError):
    """Static call reverted or the RPC provider was unavailable."""


class PoolMathError(ArithmeticError):
    """Base class for local pool pricing errors."""


class DivisionByZeroError(PoolMathError, ZeroDivisionError):
    pass


class YIsZeroError(DivisionByZeroError):
    """Q64.64 division with a zero denominator."""


class SwapSimulationError(PoolMathError):
    """Simulated swap cannot be applied to the pool reserves."""
