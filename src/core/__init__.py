"""
Core bit-manipulation primitives and contracts.

This module contains the foundational building blocks that are independent
of external systems: fixed-width unsigned bit operations and the golden
vector contracts that pin their behaviour.
"""
