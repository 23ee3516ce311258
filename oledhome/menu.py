"""Two-button room control menu whose room state is shared over MQTT."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from oledhome.display import Display

ROOM_COUNT = 4
TEMP_MIN = 15
TEMP_MAX = 30

_TOPIC_RE = re.compile(r"home/room/\s*([+-]?\d+)")
_STATE_RE = re.compile(r'\{"light":\s*([+-]?\d+),"temperature":\s*([+-]?\d+)')

logger = logging.getLogger(__name__)

Publisher = Callable[[str, str], object]


@dataclass
class Room:
    """Light and temperature setting of one room."""

    light_on: bool = False
    temperature: int = TEMP_MIN


class AppState(Enum):
    """Screens of the menu."""

    MAIN_MENU = auto()
    VIEW_STATUS = auto()
    CHANGE_MENU = auto()
    ROOM_SETTINGS = auto()
    ADJUST_LIGHT = auto()
    ADJUST_TEMPERATURE = auto()


def room_topic(room_number: int) -> str:
    """MQTT topic of the room with zero-based index ``room_number``."""
    return f"home/room/{room_number + 1}"


def encode_room_state(room: Room) -> str:
    """JSON payload that carries a room's state."""
    return f'{{"light":{int(room.light_on)},"temperature":{room.temperature}}}'


def parse_room_topic(topic: str) -> int:
    """Return the zero-based room index named by ``topic``.

    Raises ValueError when the topic has the wrong form or names a room
    that does not exist.
    """
    match = _TOPIC_RE.match(topic)
    if match is None:
        raise ValueError(f"invalid topic format: {topic!r}")
    number = int(match[1])
    if not 1 <= number <= ROOM_COUNT:
        raise ValueError(f"invalid room number in topic: {number}")
    return number - 1


def parse_room_state(data: str) -> Room:
    """Decode a room state payload. Raises ValueError on a bad format."""
    match = _STATE_RE.match(data)
    if match is None:
        raise ValueError(f"invalid data format: {data!r}")
    return Room(light_on=bool(int(match[1])), temperature=int(match[2]))


class HomeController:
    """Menu state machine driving a Display.

    ``publish`` is called as ``publish(topic, payload)`` whenever a room
    setting is changed from the menu.
    """

    def __init__(self, display: Display, publish: Publisher | None = None) -> None:
        self.display = display
        self.publish = publish
        self.rooms = [Room() for _ in range(ROOM_COUNT)]
        self.current_room = 0
        self.current_option = 0
        self.state = AppState.MAIN_MENU

    def _send_room_state(self, index: int) -> None:
        topic = room_topic(index)
        payload = encode_room_state(self.rooms[index])
        if self.publish is not None:
            self.publish(topic, payload)
        logger.info("Sent state to server: %s -> %s", topic, payload)

    def subscriptions(self) -> list[str]:
        """Topics of every room, in room order."""
        return [room_topic(index) for index in range(ROOM_COUNT)]

    def update_display(self) -> None:
        """Redraw the current screen and send it to the panel."""
        display = self.display
        display.clear_screen(False)
        state = self.state
        option = self.current_option

        if state is AppState.MAIN_MENU:
            display.display_text(0, "1. Uvidet stav", option == 0)
            display.display_text(1, "2. Provest zmeny", option == 1)
        elif state is AppState.VIEW_STATUS:
            for index, room in enumerate(self.rooms):
                light = "ON" if room.light_on else "OFF"
                line = f"Room {index + 1}: {light}, {room.temperature}C"
                display.display_text(index, line, False)
            display.display_text(ROOM_COUNT, "Zpet", True)
        elif state is AppState.CHANGE_MENU:
            for index in range(ROOM_COUNT):
                selected = index == self.current_room
                marker = "->" if selected else "  "
                display.display_text(index, f"{marker} Room {index + 1}", selected)
            display.display_text(ROOM_COUNT, "Zpet", self.current_room == ROOM_COUNT)
        elif state is AppState.ROOM_SETTINGS:
            display.display_text(0, f"Room {self.current_room + 1}", False)
            display.display_text(1, "1. Svetlo\0", option == 0)
            display.display_text(2, "2. Teplota\0", option == 1)
            display.display_text(3, "3. Zpet", option == 2)
        elif state is AppState.ADJUST_LIGHT:
            light = "ON" if self.rooms[self.current_room].light_on else "OFF"
            display.display_text(0, f"Svetlo: {light}", False)
            display.display_text(2, "Right button:OK\0", False)
        elif state is AppState.ADJUST_TEMPERATURE:
            temperature = self.rooms[self.current_room].temperature
            display.display_text(0, f"Teplota: {temperature}C", False)
            display.display_text(2, "Left button: +\0", False)
            display.display_text(3, "Right button: OK", False)

        display.show_buffer()

    def press_select(self) -> None:
        """Handle the select button: move the highlight or raise the temperature."""
        state = self.state
        if state is AppState.MAIN_MENU:
            self.current_option = (self.current_option + 1) % 2
        elif state in (AppState.VIEW_STATUS, AppState.CHANGE_MENU):
            self.current_room = (self.current_room + 1) % (ROOM_COUNT + 1)
        elif state is AppState.ROOM_SETTINGS:
            self.current_option = (self.current_option + 1) % 3
        elif state is AppState.ADJUST_TEMPERATURE:
            room = self.rooms[self.current_room]
            room.temperature += 1
            if room.temperature > TEMP_MAX:
                room.temperature = TEMP_MIN
            self._send_room_state(self.current_room)
        self.update_display()

    def press_ok(self) -> None:
        """Handle the OK button: enter, confirm or go back."""
        state = self.state
        if state is AppState.MAIN_MENU:
            self.state = (
                AppState.VIEW_STATUS if self.current_option == 0 else AppState.CHANGE_MENU
            )
        elif state is AppState.VIEW_STATUS:
            if self.current_room == ROOM_COUNT:
                self.state = AppState.MAIN_MENU
        elif state is AppState.CHANGE_MENU:
            if self.current_room == ROOM_COUNT:
                self.state = AppState.MAIN_MENU
            else:
                self.state = AppState.ROOM_SETTINGS
        elif state is AppState.ROOM_SETTINGS:
            if self.current_option == 2:
                self.state = AppState.CHANGE_MENU
            elif self.current_option == 0:
                self.state = AppState.ADJUST_LIGHT
            else:
                self.state = AppState.ADJUST_TEMPERATURE
        elif state is AppState.ADJUST_LIGHT:
            room = self.rooms[self.current_room]
            room.light_on = not room.light_on
            self._send_room_state(self.current_room)
            self.state = AppState.ROOM_SETTINGS
        elif state is AppState.ADJUST_TEMPERATURE:
            self.state = AppState.ROOM_SETTINGS
        self.update_display()

    def handle_message(self, topic: str, data: str) -> bool:
        """Apply a room state received from the broker.

        Returns True when a room was updated. Malformed messages are
        logged and ignored.
        """
        try:
            index = parse_room_topic(topic)
            state = parse_room_state(data)
        except ValueError as exc:
            logger.warning("%s", exc)
            return False
        self.rooms[index] = state
        logger.info(
            "Room %d updated: Light=%d, Temperature=%d",
            index + 1,
            state.light_on,
            state.temperature,
        )
        if self.current_room == index:
            self.update_display()
        return True