"""Off-chain math for concentrated-liquidity AMMs."""

__version__ = "0.1.0"
