"""
RODA - spinning name wheel.

Enter names, spin, and let an eased, ticking wheel pick the winner.
"""

__version__ = "0.1.0"
