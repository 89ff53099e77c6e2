import json

import pytest
from requests import ConnectionError as RequestsConnectionError

from dgb_rpcutil.config import RPCConfig
from dgb_rpcutil.rpc_client import DigiByteRPCClient, RPCError, RPCTransportError


class StubResponse:
    def __init__(self, status_code: int, body) -> None:
        self.status_code = status_code
        self._body = body
        self.text = json.dumps(body) if body is not None else "<html>"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class StubSession:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append((url, json.loads(kwargs["data"])))
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, wallet=None) -> DigiByteRPCClient:
    config = RPCConfig(user="u", password="p", port=14022, wallet=wallet)
    return DigiByteRPCClient(config, session=session)  # type: ignore[arg-type]


def test_getaddressinfo_posts_to_wallet_url() -> None:
    session = StubSession(StubResponse(200, {"result": {"pubkey": "02ab"}, "error": None}))

    info = _client(session, wallet="lab").getaddressinfo("Daddr")

    assert info == {"pubkey": "02ab"}
    url, payload = session.requests[0]
    assert url == "http://127.0.0.1:14022/wallet/lab"
    assert payload["method"] == "getaddressinfo"
    assert payload["params"] == ["Daddr"]


def test_rpc_errors_surface_code_and_message() -> None:
    body = {"result": None, "error": {"code": -5, "message": "Invalid address"}}
    session = StubSession(StubResponse(500, body))

    with pytest.raises(RPCError) as excinfo:
        _client(session).getaddressinfo("bad")

    assert excinfo.value.code == -5
    assert excinfo.value.message == "Invalid address"


@pytest.mark.parametrize(
    "session",
    [
        StubSession(error=RequestsConnectionError("refused")),
        StubSession(StubResponse(401, None)),
        StubSession(StubResponse(200, None)),
        StubSession(StubResponse(503, {"result": None, "error": None})),
    ],
)
def test_transport_failures(session) -> None:
    with pytest.raises(RPCTransportError):
        _client(session).call("getblockcount")
