from solprobe.keys import PublicKey

# Reference: https://docs.solana.com/developing/runtime-facilities/sysvars
RENT_PUBKEY = PublicKey.from_base58('SysvarRent111111111111111111111111111111111')
