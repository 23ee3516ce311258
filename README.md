# oledhome

A pure-Python toolkit for SSD1306 OLED panels of up to 128 columns, and a
small room-control menu built on it.

`Display` keeps a local copy of the panel's page-organised memory (4 pages
for a 32-row panel, otherwise 8, each of 128 one-byte columns). It draws
text from a built-in 8x8 font, scrolls in software or asks the panel to
scroll in hardware, and turns every operation into the command and data
bytes the controller expects. Those bytes go to a transport.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## A short example

```python
from oledhome import graphics
from oledhome.display import Display
from oledhome.transport import MemoryTransport

panel = MemoryTransport()            # in-memory panel that decodes the commands
display = Display(panel, 128, 64)    # sends the init sequence on creation
display.display_text(0, "Hello", False)
graphics.draw_line(display, 0, 16, 127, 63, False)
display.show_buffer()

bytes(panel.ram[0][:8]).hex()        # '7f7f08087f7f0000', the glyph for "H"
```

## Modules

- `oledhome.font`: the 8x8 font for code points 0 to 127, stored column by
  column with bit 0 as the top pixel. `glyph(code)` takes a one-character
  string or an integer and returns eight bytes; codes outside 0..127 raise
  `ValueError`.
- `oledhome.bitops`: `invert`, `flip`, `rotate_byte` (for example
  `rotate_byte(0x12) == 0x48`), `copy_bit` and `rotate_image`, which turns
  an 8x8 column image a quarter turn.
- `oledhome.commands`: the controller's command constants, `ScrollType`,
  `pages_for_height`, and builders for byte sequences: `init_sequence`,
  `addressing_sequence`, `contrast_sequence` (clamps to 0..255) and
  `hardware_scroll_sequence`.
- `oledhome.transport`: the abstract `Transport` with `send_commands` and
  `send_data`, and three implementations:
  - `I2cTransport(write, address=0x3C)` calls `write(address, payload)`
    once per run of bytes. Each run starts with the command-stream or
    data-stream control byte.
  - `SpiTransport(write, set_dc)` sets the D/C line through `set_dc` and
    writes the bytes through `write`. It sends commands one byte per
    transaction.
  - `MemoryTransport` records all traffic. It also follows the column and
    page cursor, contrast, on/off, inversion and scrolling state, and puts
    data bytes into `ram`.

  An `OSError` from a write callable is raised again as `TransportError`.
- `oledhome.display`: `Display(transport, width=128, height=64, *, flip=False,
  offset_x=0, sleep=time.sleep, tick_seconds=0.01)`.
  - Buffer access: `show_buffer`, `get_buffer`, `set_buffer`, `get_page`,
    `set_page` and `display_image`.
  - Text: `display_text` (up to 16 characters), `display_text_x3` (up to 5
    characters, three times as large), `display_text_box1` and
    `display_text_box2` (text scrolling through a box),
    `display_rotate_text`, `clear_screen` and `clear_line`.
  - Scrolling: `software_scroll` with `scroll_text` and `scroll_clear`,
    `hardware_scroll`, and `wrap_around`, which rotates the frame by a pixel
    or a page.
  - Also `contrast`, `fadeout`, and `dump`, which returns the geometry as
    text.
  - Delays are counted in ticks of `tick_seconds`.
- `oledhome.graphics`: drawing into a display's frame without sending it.
  The functions are `set_pixel`, `draw_line`, `draw_circle`, `draw_cursor`
  and `draw_bitmap`. The bitmap is row-major with the most significant bit
  first, and its width must be a multiple of 8. `bitmaps` draws and then
  calls `show_buffer`.
- `oledhome.menu`: `Room`, `AppState` and `HomeController`.
  - `HomeController` has `press_select`, `press_ok`, `update_display`,
    `handle_message` and `subscriptions`.
  - `room_topic`, `encode_room_state`, `parse_room_topic` and
    `parse_room_state` handle the `home/room/<n>` topics and their
    `{"light":<0|1>,"temperature":<n>}` payloads.
- `oledhome.app`: `TerminalTransport`, a `MemoryTransport` whose `render()`
  draws the panel as `#` and `.` characters. `MqttLink` connects a
  controller to a paho-mqtt client. `run(broker, port)` and `main` start the
  application.

## The room-control menu

There are four rooms. Each has a light, on or off, and a temperature that
starts at 15 °C. Two buttons drive the menu:

- *select* moves the highlight. On the temperature screen it raises the
  temperature by one degree, and goes from 30 back to 15.
- *ok* enters, confirms or goes back.

From the main menu you can view the state of every room, or pick a room and
change its light or temperature. Every change is published to the room's
topic with QoS 1 as a retained message.

Once connected, the application subscribes to all four topics. A valid
message updates that room's state, and the screen is redrawn when that room
is the selected one. Messages with a malformed topic or payload are logged
and ignored.

Start it with:

```
oledhome
```

Options are `--broker` (default `localhost`) and `--port` (default `1883`):

```
oledhome --broker localhost --port 1883
oledhome --help
```

The panel is drawn in the terminal. Type `s` (select), `o` (ok) or `q`
(quit), each followed by Enter.

## What it does not do

The package contains no I2C, SPI or GPIO bus drivers. To drive a real
panel, give `I2cTransport` or `SpiTransport` callables that write to your
bus. The command-line application uses keyboard input in place of physical
buttons and a panel simulated in the terminal. It does not set up any
network connection of its own beyond connecting to the MQTT broker you
name.