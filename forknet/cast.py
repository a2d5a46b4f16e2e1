# Argument lists for the foundry `cast` client talking to a local anvil fork

ERC721_TRANSFER_SIG = "safeTransferFrom(address,address,uint256)"
ERC20_TRANSFER_SIG = "transfer(address,uint256)"


def impersonate_command(from_address, rpc_url):
    return ["cast", "rpc", "anvil_impersonateAccount", from_address, "--rpc-url", rpc_url]


def erc721_transfer_command(contract_address, from_address, to_address, token_id, rpc_url):
    return [
        "cast", "send", contract_address,
        "--from", from_address,
        ERC721_TRANSFER_SIG, from_address, to_address, str(token_id),
        "--rpc-url", rpc_url, "--unlocked",
    ]


def erc20_transfer_command(contract_address, from_address, to_address, amount, rpc_url):
    return [
        "cast", "send", contract_address,
        "--from", from_address,
        ERC20_TRANSFER_SIG, to_address, str(amount),
        "--rpc-url", rpc_url, "--unlocked",
    ]


def eth_transfer_command(from_address, private_key, to_address, amount_wei, rpc_url):
    return [
        "cast", "send", to_address,
        "--value", str(amount_wei),
        "--from", from_address,
        "--private-key", private_key,
        "--rpc-url", rpc_url,
    ]
