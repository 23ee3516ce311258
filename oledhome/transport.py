"""Byte transports that carry SSD1306 commands and image data to a panel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from oledhome.commands import (
    ACTIVATE_SCROLL,
    CONTINUOUS_SCROLL,
    CONTROL_CMD_STREAM,
    CONTROL_DATA_STREAM,
    DEACTIVATE_SCROLL,
    DISPLAY_INVERTED,
    DISPLAY_NORMAL,
    DISPLAY_OFF,
    DISPLAY_ON,
    HORIZONTAL_LEFT,
    HORIZONTAL_RIGHT,
    I2C_ADDRESS,
    SET_CHARGE_PUMP,
    SET_COLUMN_RANGE,
    SET_COM_PIN_MAP,
    SET_CONTRAST,
    SET_DISPLAY_CLK_DIV,
    SET_DISPLAY_OFFSET,
    SET_MEMORY_ADDR_MODE,
    SET_MUX_RATIO,
    SET_PAGE_RANGE,
    SET_PAGE_START,
    SET_PRECHARGE,
    SET_VCOMH_DESELECT,
    VERTICAL,
)

SPI_COMMAND_MODE = 0
SPI_DATA_MODE = 1
SPI_DEFAULT_FREQUENCY = 1_000_000
I2C_MASTER_FREQ_HZ = 400_000

_VERTICAL_LEFT_SCROLL = 0x2A


class TransportError(OSError):
    """A transfer to the panel failed."""


class Transport(ABC):
    """Something that can deliver command and data bytes to a panel."""

    @abstractmethod
    def send_commands(self, commands: Iterable[int]) -> None:
        """Send a run of command bytes."""

    @abstractmethod
    def send_data(self, data: Iterable[int]) -> None:
        """Send a run of display RAM bytes."""


class I2cTransport(Transport):
    """Sends each run as one I2C transfer prefixed by a control byte.

    ``write`` is called as ``write(address, payload)`` for every transfer.
    An OSError raised by it is reported as TransportError.
    """

    def __init__(
        self,
        write: Callable[[int, bytes], None],
        address: int = I2C_ADDRESS,
        frequency_hz: int = I2C_MASTER_FREQ_HZ,
    ) -> None:
        if not 0 <= address <= 0x7F:
            raise ValueError(f"I2C address must be in 0..127, got {address}")
        if frequency_hz <= 0:
            raise ValueError(f"frequency must be positive, got {frequency_hz}")
        self._write = write
        self.address = address
        self.frequency_hz = frequency_hz

    def _transmit(self, control: int, body: Iterable[int]) -> None:
        payload = bytes((control,)) + bytes(body)
        try:
            self._write(self.address, payload)
        except OSError as exc:
            raise TransportError(
                f"could not write to device 0x{self.address:02x}: {exc}"
            ) from exc

    def send_commands(self, commands: Iterable[int]) -> None:
        self._transmit(CONTROL_CMD_STREAM, commands)

    def send_data(self, data: Iterable[int]) -> None:
        self._transmit(CONTROL_DATA_STREAM, data)


class SpiTransport(Transport):
    """Sends bytes over SPI, selecting command or data with the D/C line.

    ``write`` receives the bytes of one SPI transaction and ``set_dc``
    receives the level of the D/C line (0 for commands, 1 for data).
    Commands go out one byte per transaction.
    """

    def __init__(
        self,
        write: Callable[[bytes], None],
        set_dc: Callable[[int], None],
        clock_speed_hz: int = SPI_DEFAULT_FREQUENCY,
    ) -> None:
        if clock_speed_hz <= 0:
            raise ValueError(f"clock speed must be positive, got {clock_speed_hz}")
        self._write = write
        self._set_dc = set_dc
        self.clock_speed_hz = clock_speed_hz

    def _transmit(self, payload: bytes) -> None:
        if not payload:
            return
        try:
            self._write(payload)
        except OSError as exc:
            raise TransportError(f"SPI transfer failed: {exc}") from exc

    def send_commands(self, commands: Iterable[int]) -> None:
        for command in bytes(commands):
            self._set_dc(SPI_COMMAND_MODE)
            self._transmit(bytes((command,)))

    def send_data(self, data: Iterable[int]) -> None:
        payload = bytes(data)
        self._set_dc(SPI_DATA_MODE)
        self._transmit(payload)


_ARGUMENT_COUNTS = {
    SET_CONTRAST: 1,
    SET_MUX_RATIO: 1,
    SET_DISPLAY_OFFSET: 1,
    SET_DISPLAY_CLK_DIV: 1,
    SET_PRECHARGE: 1,
    SET_COM_PIN_MAP: 1,
    SET_VCOMH_DESELECT: 1,
    SET_CHARGE_PUMP: 1,
    SET_MEMORY_ADDR_MODE: 1,
    SET_COLUMN_RANGE: 2,
    SET_PAGE_RANGE: 2,
    HORIZONTAL_RIGHT: 6,
    HORIZONTAL_LEFT: 6,
    CONTINUOUS_SCROLL: 5,
    _VERTICAL_LEFT_SCROLL: 5,
    VERTICAL: 2,
}


class MemoryTransport(Transport):
    """An in-memory panel that records traffic and emulates page-mode RAM.

    Command runs are decoded so that the column and page cursor, contrast,
    on/off, inversion and scrolling state follow what a panel would do.
    Data bytes land in ``ram`` at the cursor, which advances by one column
    per byte; bytes past the last column are dropped.
    """

    def __init__(self, width: int = 128, pages: int = 8) -> None:
        if width <= 0 or pages <= 0:
            raise ValueError("width and pages must be positive")
        self.width = width
        self.pages = pages
        self.ram = [bytearray(width) for _ in range(pages)]
        self.page = 0
        self.column = 0
        self.contrast = 0x7F
        self.display_on = False
        self.inverted = False
        self.scrolling = False
        self.commands: list[bytes] = []
        self.data: list[bytes] = []
        self._command: int | None = None
        self._args: list[int] = []

    def send_commands(self, commands: Iterable[int]) -> None:
        payload = bytes(commands)
        self.commands.append(payload)
        for byte in payload:
            if self._command is not None:
                self._args.append(byte)
                if len(self._args) == _ARGUMENT_COUNTS[self._command]:
                    self._apply(self._command, self._args)
                    self._command, self._args = None, []
            elif byte in _ARGUMENT_COUNTS:
                self._command, self._args = byte, []
            else:
                self._apply(byte, [])

    def _apply(self, command: int, args: list[int]) -> None:
        if command == SET_CONTRAST:
            self.contrast = args[0]
        elif command == DISPLAY_ON:
            self.display_on = True
        elif command == DISPLAY_OFF:
            self.display_on = False
        elif command == DISPLAY_NORMAL:
            self.inverted = False
        elif command == DISPLAY_INVERTED:
            self.inverted = True
        elif command == ACTIVATE_SCROLL:
            self.scrolling = True
        elif command == DEACTIVATE_SCROLL:
            self.scrolling = False
        elif 0x00 <= command <= 0x0F:
            self.column = (self.column & 0xF0) | command
        elif 0x10 <= command <= 0x1F:
            self.column = ((command & 0x0F) << 4) | (self.column & 0x0F)
        elif SET_PAGE_START <= command <= SET_PAGE_START + 0x07:
            self.page = command & 0x07

    def send_data(self, data: Iterable[int]) -> None:
        payload = bytes(data)
        self.data.append(payload)
        if self.page >= self.pages:
            return
        row = self.ram[self.page]
        for byte in payload:
            if self.column < self.width:
                row[self.column] = byte
            self.column += 1