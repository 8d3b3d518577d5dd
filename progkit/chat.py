"""A chat server that relays every client's messages to all clients."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from typing import Optional


def _format_addr(peer) -> str:
    if not peer:
        return "unknown"
    host, port = peer[0], peer[1]
    return f"[{host}]:{port}" if ":" in host else f"{host}:{port}"


class ChatServer:
    """Relays lines from each connected client to every connected client."""

    def __init__(self) -> None:
        self._clients: set[asyncio.Queue] = set()

    @property
    def client_count(self) -> int:
        """The number of clients currently connected."""
        return len(self._clients)

    def _broadcast(self, message: str) -> None:
        for client in list(self._clients):
            client.put_nowait(message)

    @staticmethod
    async def _client_writer(writer: asyncio.StreamWriter, outgoing: asyncio.Queue) -> None:
        while (message := await outgoing.get()) is not None:
            with contextlib.suppress(ConnectionError):
                writer.write((message + "\n").encode("utf-8"))
                await writer.drain()

    async def handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Serve one client connection until it closes."""
        outgoing: asyncio.Queue = asyncio.Queue()
        writer_task = asyncio.create_task(self._client_writer(writer, outgoing))
        who = _format_addr(writer.get_extra_info("peername"))
        outgoing.put_nowait("You are " + who)
        self._broadcast(who + " has arrived")
        self._clients.add(outgoing)
        try:
            async for raw in reader:
                line = raw.rstrip(b"\n")
                if line.endswith(b"\r"):
                    line = line[:-1]
                self._broadcast(f"{who}: {line.decode('utf-8', errors='replace')}")
        except (ConnectionError, ValueError, asyncio.IncompleteReadError):
            pass
        finally:
            self._clients.discard(outgoing)
            outgoing.put_nowait(None)
            self._broadcast(who + " has left")
            await writer_task
            writer.close()
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()

    async def serve(self, host: str = "localhost", port: int = 8000) -> None:
        """Accept and serve clients on host and port forever."""
        server = await asyncio.start_server(self.handle, host, port)
        async with server:
            await server.serve_forever()


def main(argv: Optional[list[str]] = None) -> int:
    """Run the chat server."""
    parser = argparse.ArgumentParser(prog="chat", description="Run a chat server.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    try:
        asyncio.run(ChatServer().serve(args.host, args.port))
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"chat: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())