"""
Integer kernels for constant-product pools.

- `checked_math`: u64/u128 range checks and exact integer square root.
- `cpmm_swap`: exact-in swap output and post-swap reserves.
- `lp_math`: LP issuance, redemption and the deposit-ratio check.

No floats, no state; domain failures raise a typed `AmmError`.
"""
