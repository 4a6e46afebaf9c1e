"""Calldata for an ERC-4337 bundle that approves a token & bridges it through Socket in one batch"""

# EntryPoint.handleOps with a single op whose callData is the EXECUTE_BATCH_CALLDATA below
HANDLE_OPS_CALLDATA = (
    "0x1fad948c000000000000000000000000000000000000000000000000000000000000004000000000000000000000000043"
    "3704c40f80cbff02e86fd36bc8bac5e31eb0c100000000000000000000000000000000000000000000000000000000000000"
    "0100000000000000000000000000000000000000000000000000000000000000200000000000000000000000007cb2c41ad9"
    "6f12dae5986006c274278122eabc7a0000000000000000000000000000000000000000000000000000000000000002000000"
    "0000000000000000000000000000000000000000000000000000000160000000000000000000000000000000000000000000"
    "000000000000000000018000000000000000000000000000000000000000000000000000000000000b71b000000000000000"
    "0000000000000000000000000000000000000000000003827000000000000000000000000000000000000000000000000000"
    "0000000016e35f000000000000000000000000000000000000000000000000000000000839b6800000000000000000000000"
    "0000000000000000000000000000000000000a87500000000000000000000000000000000000000000000000000000000000"
    "0005000000000000000000000000000000000000000000000000000000000000000540000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000034447"
    "e1da2a0000000000000000000000000000000000000000000000000000000000000060000000000000000000000000000000"
    "00000000000000000000000000000000c0000000000000000000000000000000000000000000000000000000000000012000"
    "00000000000000000000000000000000000000000000000000000000000002000000000000000000000000505de0f7a5d786"
    "063348ab5bc31e3a21344fa7b0000000000000000000000000ce2fc6c6bfcf04f2f857338ecf6004381f4149260000000000"
    "0000000000000000000000000000000000000000000000000000020000000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000000000000000000000083266e09f7a33000000000000000000"
    "0000000000000000000000000000000000000000000002000000000000000000000000000000000000000000000000000000"
    "000000004000000000000000000000000000000000000000000000000000000000000000c000000000000000000000000000"
    "00000000000000000000000000000000000044095ea7b3000000000000000000000000ce2fc6c6bfcf04f2f857338ecf6004"
    "381f414926ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff00000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000104405e72"
    "0a000000000000000000000000439b175a246b3fe2189c4c2fa1e6662eb31431030000000000000000000000000000000000"
    "0000000000003500f396adff150000000000000000000000000000000000000000000000000000000000000007a120000000"
    "0000000000000000008feab0b3050320075c8a02dd8f0e404bc7cffb00000000000000000000000000000000000000000000"
    "00000000000000000000c000000000000000000000000000000000000000000000000000000000000000e000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000141842a4eff3"
    "efd24c50b63c3cf89cecee245fc2bd0000000000000000000000000000000000000000000000000000000000000000000000"
    "000000000000000041a27cf8015e97b2e789a57da7f4cc52ba156626a9d7631fd2e1aea21fe6b9151e15b9a642980bd4f5f9"
    "d9614ca8a0afe3b5f71833585df181c502b381a3f166ac1b0000000000000000000000000000000000000000000000000000"
    "0000000000"
)

# SimpleAccount.executeBatch([token, bridge], [0, fee], [approve, bridge])
EXECUTE_BATCH_CALLDATA = (
    "0x47e1da2a000000000000000000000000000000000000000000000000000000000000006000000000000000000000000000"
    "000000000000000000000000000000000000c000000000000000000000000000000000000000000000000000000000000001"
    "200000000000000000000000000000000000000000000000000000000000000002000000000000000000000000505de0f7a5"
    "d786063348ab5bc31e3a21344fa7b0000000000000000000000000ce2fc6c6bfcf04f2f857338ecf6004381f414926000000"
    "0000000000000000000000000000000000000000000000000000000002000000000000000000000000000000000000000000"
    "000000000000000000000000000000000000000000000000000000000000000000000000083266e09f7a3300000000000000"
    "0000000000000000000000000000000000000000000000000200000000000000000000000000000000000000000000000000"
    "0000000000004000000000000000000000000000000000000000000000000000000000000000c00000000000000000000000"
    "000000000000000000000000000000000000000044095ea7b3000000000000000000000000ce2fc6c6bfcf04f2f857338ecf"
    "6004381f414926ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff0000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000010440"
    "5e720a000000000000000000000000439b175a246b3fe2189c4c2fa1e6662eb3143103000000000000000000000000000000"
    "00000000000000003500f396adff150000000000000000000000000000000000000000000000000000000000000007a12000"
    "00000000000000000000008feab0b3050320075c8a02dd8f0e404bc7cffb0000000000000000000000000000000000000000"
    "000000000000000000000000c000000000000000000000000000000000000000000000000000000000000000e00000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000000000000000000000000000"
)

APPROVE_CALLDATA = (
    "0x095ea7b3000000000000000000000000ce2fc6c6bfcf04f2f857338ecf6004381f414926ffffffffffffffffffffffffff"
    "ffffffffffffffffffffffffffffffffffffff"
)

BRIDGE_CALLDATA = (
    "0x405e720a000000000000000000000000439b175a246b3fe2189c4c2fa1e6662eb314310300000000000000000000000000"
    "000000000000000000003500f396adff150000000000000000000000000000000000000000000000000000000000000007a1"
    "200000000000000000000000008feab0b3050320075c8a02dd8f0e404bc7cffb000000000000000000000000000000000000"
    "0000000000000000000000000000c000000000000000000000000000000000000000000000000000000000000000e0000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000"
)
