"""Offline transfer example for evm-deterministic.

This example demonstrates:
- Deriving a key pair and address from a seed
- Building and signing a native transfer with an attached message
- Building and signing an ERC-20 token transfer
- Error handling for unsupported intents
"""

import os

from dotenv import load_dotenv

from evm_deterministic import DeterministicClient, DeterministicError

load_dotenv()


def example_offline_transfers():
    """Example of building signed transactions without network access."""

    seed = os.getenv("WALLET_SEED")
    if not seed:
        raise ValueError("WALLET_SEED not found in environment variables")

    chain_id = os.getenv("CHAIN_ID")
    client = DeterministicClient(chain_id=int(chain_id) if chain_id else None)

    keys = client.keys(seed)
    print(f"Address: {client.address(keys)}")

    # Snapshot as returned by a chain-query service
    unspent = {"nonce": 5, "gasBaseFee": "21000", "gasLimit": "21000", "gasDataFee": "0"}

    raw_native = client.transaction(
        {
            "mode": "native",
            "target": os.getenv("TARGET_ADDRESS", "0x" + "ab" * 20),
            "amount": "1000000000000000000",
            "fee": "21000000000000",
            "message": "invoice 42",
        },
        unspent,
        keys,
    )
    print(f"✅ Native transfer: {raw_native}")

    token_unspent = dict(unspent, gasLimit="60000")
    raw_token = client.transaction(
        {
            "mode": "token",
            "target": os.getenv("TARGET_ADDRESS", "0x" + "ab" * 20),
            "amount": "2500000",
            "fee": "60000000000000",
            "contract": os.getenv("TOKEN_CONTRACT", "0x" + "cd" * 20),
        },
        token_unspent,
        keys,
    )
    print(f"✅ Token transfer: {raw_token}")

    try:
        client.transaction(
            {
                "mode": "token",
                "target": "0x" + "ab" * 20,
                "amount": "1",
                "fee": "1",
                "contract": "0x" + "cd" * 20,
                "message": "memo",
            },
            token_unspent,
            keys,
        )
    except DeterministicError as exc:
        print(f"❌ Token transfer with message rejected: {exc.message}")


if __name__ == "__main__":
    example_offline_transfers()
