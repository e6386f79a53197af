"""
Shared builders for unit tests

Real solders transactions and real httpx.Response objects; a FakeHttp
router stands in for httpx.Client.get/post so no network is used.
"""

import base64

import httpx
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import transfer, TransferParams
from solders.transaction import VersionedTransaction

from jupiter_flows.config import FeeConfig

JUPITER_URL = "https://jup.test"
RPC_URL = "https://rpc.test"

# Token whose USD value cannot be derived locally
JUP_MINT = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"


def transfer_instruction(payer: Pubkey, lamports: int = 1000):
    return transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=lamports))


def make_unsigned_transaction(payer: Pubkey) -> VersionedTransaction:
    """Unsigned v0 transfer with payer as the only required signer"""
    message = MessageV0.try_compile(payer, [transfer_instruction(payer)], [], Hash.new_unique())
    return VersionedTransaction.populate(message, [Signature.default()])


def encode(transaction: VersionedTransaction) -> str:
    return base64.b64encode(bytes(transaction)).decode("ascii")


def instruction_json(payer: Pubkey) -> dict:
    """Jupiter JSON-format instruction for a system transfer"""
    ix = transfer_instruction(payer)
    return {
        "programId": str(ix.program_id),
        "accounts": [
            {"pubkey": str(meta.pubkey), "isSigner": meta.is_signer, "isWritable": meta.is_writable}
            for meta in ix.accounts
        ],
        "data": base64.b64encode(bytes(ix.data)).decode("ascii"),
    }


def json_response(payload, status_code: int = 200, method: str = "GET", url: str = JUPITER_URL) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request(method, url))


def text_response(text: str, status_code: int = 200, method: str = "GET", url: str = JUPITER_URL) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request(method, url))


def quote_payload(input_mint: str, output_mint: str, in_amount: int = 50_000_000, out_amount: int = 7_500_000) -> dict:
    return {
        "inputMint": input_mint,
        "outputMint": output_mint,
        "inAmount": str(in_amount),
        "outAmount": str(out_amount),
        "otherAmountThreshold": str(out_amount - out_amount // 200),
        "swapMode": "ExactIn",
        "slippageBps": 50,
        "priceImpactPct": "0.0012",
        "routePlan": [{"swapInfo": {"label": "Whirlpool"}, "percent": 100}],
    }


class FakeHttp:
    """
    Routes httpx.Client.get/post to canned responses

    Jupiter routes are keyed by path; JSON-RPC calls are keyed by method.
    A route value is a payload dict, an httpx.Response, or a callable
    receiving the request params/body.
    """

    def __init__(self):
        self.routes = {}
        self.rpc = {}
        self.calls = []

    def _resolve(self, route, arg, method, url):
        if callable(route):
            route = route(arg)
        if isinstance(route, httpx.Response):
            return route
        return json_response(route, method=method, url=url)

    def get(self, url, params=None, **kwargs):
        path = url.replace(JUPITER_URL, "")
        self.calls.append(("GET", path, params))
        return self._resolve(self.routes[path], params, "GET", url)

    def post(self, url, json=None, **kwargs):
        if json is not None and "jsonrpc" in json:
            method = json["method"]
            self.calls.append(("RPC", method, json["params"]))
            result = self.rpc[method]
            if callable(result):
                result = result(json["params"])
            return json_response({"jsonrpc": "2.0", "id": json["id"], "result": result}, method="POST", url=url)

        path = url.replace(JUPITER_URL, "")
        self.calls.append(("POST", path, json))
        return self._resolve(self.routes[path], json, "POST", url)

    def called(self, kind, name):
        return [call for call in self.calls if call[0] == kind and call[1] == name]


def echo_signature(params):
    """sendTransaction handler returning the submitted fee payer signature"""
    raw = base64.b64decode(params[0])
    return str(VersionedTransaction.from_bytes(raw).signatures[0])


def confirmed_status(params):
    return {"context": {"slot": 1}, "value": [{"confirmationStatus": "confirmed", "err": None, "slot": 1}]}


def make_client(keypair: Keypair = None, fee: FeeConfig = None):
    from jupiter_flows.client import JupiterClient

    return JupiterClient(
        rpc_url=RPC_URL,
        keypair=keypair or Keypair(),
        jupiter_base_url=JUPITER_URL,
        api_key="",
        fee=fee or FeeConfig(fee_account="", fee_bps=0),
    )
