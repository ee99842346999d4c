"""
Kernel layer.

`rushswap/kernels/python/` holds the integer-only arithmetic kernels the pool
operations in `rushswap/core/` are built from.
"""
