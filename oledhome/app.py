"""Terminal front end: a simulated panel, two keys and an MQTT link."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from collections.abc import Iterable
from typing import Any, TextIO

import paho.mqtt.client as mqtt

from oledhome.display import Display
from oledhome.menu import HomeController
from oledhome.transport import MemoryTransport

DEFAULT_BROKER = "localhost"
DEFAULT_PORT = 1883

logger = logging.getLogger(__name__)

_HELP = "keys: s = select, o = ok, q = quit"


class TerminalTransport(MemoryTransport):
    """An emulated panel whose RAM can be drawn as text."""

    def __init__(self, width: int = 128, pages: int = 8, on: str = "#", off: str = ".") -> None:
        super().__init__(width, pages)
        self.on = on
        self.off = off
        self.dirty = False

    def send_commands(self, commands: Iterable[int]) -> None:
        super().send_commands(commands)
        self.dirty = True

    def send_data(self, data: Iterable[int]) -> None:
        super().send_data(data)
        self.dirty = True

    def render(self) -> str:
        """Return the panel as lines of characters, one per pixel row."""
        self.dirty = False
        if not self.display_on:
            return "\n".join(self.off * self.width for _ in range(self.pages * 8))
        lit = (self.on, self.off) if self.inverted else (self.off, self.on)
        return "\n".join(
            "".join(lit[(column >> bit) & 1] for column in row)
            for row in self.ram
            for bit in range(8)
        )


class MqttLink:
    """Connects a HomeController with an MQTT client."""

    def __init__(self, controller: HomeController, client: Any) -> None:
        self.controller = controller
        self.client = client
        self.lock = threading.Lock()
        client.on_connect = self.on_connect
        client.on_message = self.on_message

    def on_connect(self, client: Any, userdata: Any, flags: Any, rc: int) -> None:
        """Subscribe to every room once the broker accepts the connection."""
        if rc != 0:
            logger.error("MQTT connection refused, code %s", rc)
            return
        logger.info("MQTT connected")
        for topic in self.controller.subscriptions():
            client.subscribe(topic, 0)
            logger.info("Subscribed to topic: %s", topic)

    def on_message(self, client: Any, userdata: Any, message: Any) -> None:
        """Pass a received room state to the controller."""
        topic = message.topic
        data = bytes(message.payload).decode("utf-8", errors="replace")
        with self.lock:
            self.controller.handle_message(topic, data)

    def publish(self, topic: str, payload: str) -> None:
        """Publish a retained room state with QoS 1."""
        self.client.publish(topic, payload, qos=1, retain=True)


def _make_client() -> Any:
    version = getattr(mqtt, "CallbackAPIVersion", None)
    if version is not None:
        return mqtt.Client(version.VERSION1)
    return mqtt.Client()


def _interact(link: MqttLink, transport: TerminalTransport, lines: TextIO, out: TextIO) -> None:
    out.write(_HELP + "\n" + transport.render() + "\n")
    out.flush()
    for line in lines:
        command = line.strip().lower()
        if not command:
            continue
        if command in ("q", "quit"):
            break
        with link.lock:
            if command in ("s", "select"):
                link.controller.press_select()
            elif command in ("o", "ok"):
                link.controller.press_ok()
            else:
                out.write(_HELP + "\n")
                out.flush()
                continue
            picture = transport.render()
        out.write(picture + "\n")
        out.flush()


def run(broker: str = DEFAULT_BROKER, port: int = DEFAULT_PORT) -> None:
    """Run the menu on the terminal, connected to an MQTT broker."""
    transport = TerminalTransport()
    display = Display(transport, 128, 64)
    display.clear_screen(False)
    controller = HomeController(display)
    controller.update_display()

    client = _make_client()
    link = MqttLink(controller, client)
    controller.publish = link.publish
    client.connect(broker, port)
    client.loop_start()
    try:
        _interact(link, transport, sys.stdin, sys.stdout)
    finally:
        client.loop_stop()
        client.disconnect()


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="oledhome", description="Room control menu on a simulated OLED panel."
    )
    parser.add_argument("--broker", default=DEFAULT_BROKER, help="MQTT broker host")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="MQTT broker port")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        run(args.broker, args.port)
    except OSError as exc:
        print(f"oledhome: {exc}", file=sys.stderr)
        return 1
    return 0