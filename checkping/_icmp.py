"""Raw-socket ICMP echo transport (IPv4 only).

Needs root or ``CAP_NET_RAW``::

    sudo setcap cap_net_raw+ep $(realpath $(which python))
"""

from __future__ import annotations

import secrets
import select
import socket
import struct
import time
from dataclasses import dataclass
from typing import Optional

from ._exceptions import RawSocketPermissionError, TransportError
from ._logging import logger

ICMP_ECHO_REQUEST = 8
ICMP_ECHO_REPLY = 0

IP_HEADER_MIN = 20
ICMP_HEADER_LEN = 8
RECV_BUFFER = 1024


@dataclass
class IcmpPacket:
    type: int
    code: int
    checksum: int
    id: int
    sequence: int
    data: bytes


@dataclass
class IpHeader:
    version: int
    ihl: int
    ttl: int
    protocol: int
    src_addr: str
    dest_addr: str


@dataclass
class ReceivedPacket:
    ip_header: IpHeader
    icmp_packet: IcmpPacket
    received_at: float


@dataclass
class SentPacket:
    icmp_packet: IcmpPacket
    timestamp: float
    destination: str


@dataclass
class EchoResponse:
    rtt: float
    addr: str
    sequence: int


def _new_identifier() -> int:
    return secrets.randbelow(0x10000)


def icmp_checksum(data: bytes) -> int:
    if len(data) % 2:
        data += b"\x00"
    total = sum(struct.unpack("!%dH" % (len(data) // 2), data))
    total = (total >> 16) + (total & 0xFFFF)
    total += total >> 16
    return (~total) & 0xFFFF


def build_echo_request(
    identifier: int, sequence: int, timestamp: float
) -> tuple[bytes, IcmpPacket]:
    data = struct.pack("d", timestamp)
    header = struct.pack("!BBHHH", ICMP_ECHO_REQUEST, 0, 0, identifier, sequence)
    checksum = icmp_checksum(header + data)
    header = struct.pack(
        "!BBHHH", ICMP_ECHO_REQUEST, 0, checksum, identifier, sequence
    )
    packet = IcmpPacket(
        type=ICMP_ECHO_REQUEST,
        code=0,
        checksum=checksum,
        id=identifier,
        sequence=sequence,
        data=data,
    )
    return header + data, packet


def parse_packet(pkt: bytes, received_at: float) -> ReceivedPacket:
    """Split a raw IPv4 datagram into its IP and ICMP headers."""
    if len(pkt) < IP_HEADER_MIN:
        raise ValueError("Packet shorter than minimum IP header length (20 bytes).")

    iph = struct.unpack("!BBHHHBBH4s4s", pkt[:IP_HEADER_MIN])
    version = iph[0] >> 4
    ihl = iph[0] & 0xF
    iph_length = ihl * 4

    if len(pkt) < iph_length + ICMP_HEADER_LEN:
        raise ValueError(
            "Packet shorter than IP header + ICMP header (IHL + 8 bytes)."
        )

    icmph = struct.unpack(
        "!BBHHH", pkt[iph_length : iph_length + ICMP_HEADER_LEN]
    )
    ip_hdr = IpHeader(
        version=version,
        ihl=ihl,
        ttl=iph[5],
        protocol=iph[6],
        src_addr=socket.inet_ntoa(iph[8]),
        dest_addr=socket.inet_ntoa(iph[9]),
    )
    icmp_pkt = IcmpPacket(
        type=icmph[0],
        code=icmph[1],
        checksum=icmph[2],
        id=icmph[3],
        sequence=icmph[4],
        data=pkt[iph_length + ICMP_HEADER_LEN :],
    )
    return ReceivedPacket(ip_header=ip_hdr, icmp_packet=icmp_pkt, received_at=received_at)


def is_reply_to(sent: SentPacket, received: ReceivedPacket) -> bool:
    icmp_pkt = received.icmp_packet
    return (
        icmp_pkt.type == ICMP_ECHO_REPLY
        and icmp_pkt.id == sent.icmp_packet.id
        and icmp_pkt.sequence == sent.icmp_packet.sequence
        and icmp_pkt.data == sent.icmp_packet.data
        and received.ip_header.src_addr == sent.destination
    )


class Icmp:
    """One ICMP session: a raw socket plus identifier/sequence bookkeeping.

    Use it as a context manager so the socket is always closed.
    """

    def __init__(self, timeout: float = 1.0):
        self.timeout = timeout
        self.seq_number = 0
        self.identifier = _new_identifier()
        self._sock: Optional[socket.socket] = None

    @property
    def sock(self) -> socket.socket:
        if self._sock is None:
            try:
                self._sock = socket.socket(
                    socket.AF_INET,
                    socket.SOCK_RAW,
                    socket.IPPROTO_ICMP,
                )
            except PermissionError as exc:
                message = (
                    "Raw socket requires elevated privileges. Use sudo or grant "
                    "CAP_NET_RAW to the Python interpreter."
                )
                raise RawSocketPermissionError(message) from exc
        return self._sock

    @staticmethod
    def _normalize_ip(host: str) -> Optional[str]:
        """Dotted-quad form of an IPv4 literal (``127.1`` -> ``127.0.0.1``)."""
        try:
            return socket.inet_ntoa(socket.inet_aton(host))
        except (OSError, ValueError):
            return None

    @staticmethod
    def _resolve_host(host: str) -> str:
        # UnicodeError (a ValueError) comes from IDNA encoding of bad labels
        try:
            return socket.gethostbyname(host)
        except (OSError, ValueError) as exc:
            raise TransportError(f"Resolve error {host!r}: {exc}") from exc

    def resolve_destination(self, dest_addr: str) -> str:
        address = self._normalize_ip(dest_addr)
        if address is not None:
            return address
        return self._resolve_host(dest_addr)

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def __enter__(self) -> "Icmp":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _send_echo_request(self, dest_addr: str) -> SentPacket:
        self.seq_number = (self.seq_number + 1) & 0xFFFF
        timestamp = time.perf_counter()
        packet_bytes, icmp_pkt = build_echo_request(
            self.identifier, self.seq_number, timestamp
        )
        try:
            self.sock.sendto(packet_bytes, (dest_addr, 1))
        except RawSocketPermissionError:
            raise
        except OSError as exc:
            raise TransportError(f"Send error {dest_addr}: {exc}") from exc
        return SentPacket(icmp_packet=icmp_pkt, timestamp=timestamp, destination=dest_addr)

    def _receive_echo_reply(self, sent: SentPacket) -> Optional[EchoResponse]:
        deadline = sent.timestamp + self.timeout
        while True:
            remaining = deadline - time.perf_counter()
            if remaining <= 0:
                return None

            try:
                ready, _, _ = select.select([self.sock], [], [], remaining)
                if not ready:
                    return None
                pkt, _ = self.sock.recvfrom(RECV_BUFFER)
            except OSError as exc:
                raise TransportError(f"Receive error: {exc}") from exc
            recv_time = time.perf_counter()

            try:
                received = parse_packet(pkt, recv_time)
            except ValueError as err:
                logger.debug("Discarding malformed packet: %s", err)
                continue

            if not is_reply_to(sent, received):
                continue

            return EchoResponse(
                rtt=(received.received_at - sent.timestamp) * 1000,
                addr=received.ip_header.src_addr,
                sequence=received.icmp_packet.sequence,
            )

    def echo(self, dest_addr: str) -> Optional[EchoResponse]:
        """Send one echo request and wait up to ``timeout`` for its reply.

        Returns ``None`` when the deadline passes first. Raises
        :class:`TransportError` when the socket cannot send or receive.
        """
        sent = self._send_echo_request(dest_addr)
        logger.debug(
            "Sent echo request to %s (id=%d seq=%d)",
            dest_addr,
            sent.icmp_packet.id,
            sent.icmp_packet.sequence,
        )
        return self._receive_echo_reply(sent)
