"""OSC request/response front end for the fret calculator.

Listens for fretboard requests and answers each one on the requesting
host with a JSON body.

Request:  /fretboard/request key value [key value ...]
          e.g. /fretboard/request scaleLength 540 tuningSystem pythagorean
Response: /fretboard/response status body
          status 200 with the fretboard JSON, or 422 with {"error": reason}
"""

import json
import threading
from typing import Callable, Optional

try:
    from pythonosc import dispatcher
    from pythonosc import osc_server
    from pythonosc import udp_client
    HAS_OSC = True
except ImportError:
    HAS_OSC = False
    dispatcher = None  # type: ignore
    osc_server = None  # type: ignore
    udp_client = None  # type: ignore

from . import config
from .systems import FretboardRequestError, fretboard_for_request


def request_params(args: tuple) -> dict[str, str]:
    """Pair up flat OSC arguments into a parameter dictionary.

    A single JSON object argument is also accepted. A trailing key
    without a value is ignored.
    """
    if len(args) == 1 and isinstance(args[0], str) and args[0].lstrip().startswith("{"):
        try:
            decoded = json.loads(args[0])
        except json.JSONDecodeError:
            return {}
        if not isinstance(decoded, dict):
            return {}
        return {str(k): str(v) for k, v in decoded.items()}

    return {str(args[i]): str(args[i + 1]) for i in range(0, len(args) - 1, 2)}


def respond(params: dict[str, str]) -> tuple[int, str]:
    """Compute the reply for one request.

    Returns:
        Tuple of (status, JSON body)
    """
    try:
        fretboard = fretboard_for_request(params)
    except FretboardRequestError as e:
        return config.STATUS_UNPROCESSABLE, json.dumps({"error": str(e)})
    return config.STATUS_OK, fretboard.to_json()


class FretboardResponder:
    """Serves fretboard requests over OSC.

    Runs the python-osc UDP server in a background thread. Replies go to
    the sender's host on `reply_port`.
    """

    def __init__(
        self,
        host: str = config.OSC_HOST,
        port: int = config.OSC_LISTEN_PORT,
        reply_port: int = config.OSC_REPLY_PORT,
        verbose: bool = True,
        client_factory: Optional[Callable[[str, int], object]] = None,
    ):
        """Initialize the responder.

        Args:
            host: Address to listen on
            port: UDP port to listen on
            reply_port: UDP port replies are sent to
            verbose: If True, print each handled request
            client_factory: Builds the reply client for (host, port);
                defaults to python-osc's SimpleUDPClient
        """
        if not HAS_OSC:
            raise ImportError(
                "python-osc is required for OSC communication. "
                "Install with: pip install python-osc"
            )

        self.host = host
        self.port = port
        self.reply_port = reply_port
        self.verbose = verbose
        self._client_factory = client_factory or udp_client.SimpleUDPClient
        self._clients: dict[str, object] = {}
        self._server: Optional[osc_server.ThreadingOSCUDPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def build_dispatcher(self) -> "dispatcher.Dispatcher":
        disp = dispatcher.Dispatcher()
        disp.map(config.OSC_REQUEST, self.handle_request, needs_reply_address=True)
        return disp

    def start(self) -> None:
        """Start serving in a background thread."""
        self._server = osc_server.ThreadingOSCUDPServer(
            (self.host, self.port),
            self.build_dispatcher(),
        )
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        if self.verbose:
            print(f"✓ OSC: Listening on {self.host}:{self.port} ({config.OSC_REQUEST})")
            print(f"✓ OSC: Replying on port {self.reply_port} ({config.OSC_RESPONSE})")

    def stop(self) -> None:
        """Stop the server and release the socket."""
        if self._server:
            self._server.shutdown()
            self._server.server_close()
        if self._thread:
            self._thread.join(timeout=1.0)
        self._server = None
        self._thread = None
        self._clients.clear()

    def handle_request(self, client_address: tuple[str, int], address: str, *args) -> None:
        """Handle /fretboard/request and send the reply to the requester."""
        params = request_params(args)
        status, body = respond(params)

        if self.verbose:
            system = params.get("tuningSystem") or config.DEFAULT_TUNING_SYSTEM
            print(f"♪ Request from {client_address[0]}: {system} @ {params.get('scaleLength')} → {status}")

        self._client_for(client_address[0]).send_message(config.OSC_RESPONSE, [status, body])

    def _client_for(self, host: str):
        with self._lock:
            client = self._clients.get(host)
            if client is None:
                client = self._client_factory(host, self.reply_port)
                self._clients[host] = client
            return client
