import os

from dotenv import load_dotenv

# Defaults target the public Aptos networks.
# Any of these can be overridden by environment variables (or a local .env).
load_dotenv()

# --- NETWORKS ---
# Same names the Aptos SDKs accept for their Network enum.
SUPPORTED_NETWORKS = ("mainnet", "testnet", "devnet", "local", "custom")

NODE_URLS = {
    "mainnet": "https://fullnode.mainnet.aptoslabs.com/v1",
    "testnet": "https://fullnode.testnet.aptoslabs.com/v1",
    "devnet": "https://fullnode.devnet.aptoslabs.com/v1",
    "local": "http://127.0.0.1:8080/v1",
}

# Mainnet has no faucet
FAUCET_URLS = {
    "testnet": "https://faucet.testnet.aptoslabs.com",
    "devnet": "https://faucet.devnet.aptoslabs.com",
    "local": "http://127.0.0.1:8081",
}

APTOS_NODE_URL = os.getenv("APTOS_NODE_URL")
APTOS_FAUCET_URL = os.getenv("APTOS_FAUCET_URL")

# --- DEPLOYMENT ---
MODULE_NAME = "metrom"
NAMED_ADDRESS = "metrom"
FUNDING_AMOUNT_OCTAS = int(os.getenv("FUNDING_AMOUNT_OCTAS", "100000000"))
PUBLISH_PAYLOAD_PATH = os.getenv("METROM_PUBLISH_PAYLOAD_PATH", os.path.join("build", "publish-payload.json"))

# --- CLI ---
APTOS_CLI = os.getenv("APTOS_CLI", "aptos")
DEFAULT_PROFILE = "default"

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

MAX_FEE_PPM = 1_000_000
MAX_U64 = 2**64 - 1
