# sketch_template.py
from dataclasses import dataclass
from typing import Optional, Sequence

from frame_batch import FrameRecord
from frame_errors import EmptyBatchError
from frame_packer import bytes_per_frame


@dataclass
class DisplayConfig:
    """SSD1306 panel the sketch drives. x/y default to centering the frame."""
    screen_width: int = 128
    screen_height: int = 64
    i2c_address: int = 0x3C
    reset_pin: int = -1
    frame_delay: int = 200   # ms between frames
    x: Optional[int] = None
    y: Optional[int] = None

    def offset(self, width: int, height: int):
        x = self.x if self.x is not None else max(0, (self.screen_width - width) // 2)
        y = self.y if self.y is not None else max(0, (self.screen_height - height) // 2)
        return x, y


def format_bytes(data: bytes, per_line: int = 16) -> str:
    lines = []
    for i in range(0, len(data), per_line):
        lines.append(",".join(str(b) for b in data[i:i + per_line]))
    return ",\n  ".join(lines)


_HEADER = """#include <Wire.h>
#include <Adafruit_GFX.h>
#include <Adafruit_SSD1306.h>

#define SCREEN_WIDTH {screen_width}
#define SCREEN_HEIGHT {screen_height}
#define OLED_RESET {reset_pin} // -1 = no reset pin
#define SCREEN_ADDRESS 0x{i2c_address:02X} // I2C address (sometimes 0x3D)

// Generated by img2oled

Adafruit_SSD1306 display(SCREEN_WIDTH, SCREEN_HEIGHT, &Wire, OLED_RESET);

/*
Wiring
Most of these panels use the SSD1306 controller over I2C (4 pins):

VCC -> 5V on the Arduino (or 3.3V, depending on the panel)
GND -> GND
SCL -> A5 (I2C clock)
SDA -> A4 (I2C data)
*/

int frame = 0;

// Size: {width}x{height} pixels
// Frames: {count}
// Bytes per frame: {bytes_per_frame}

#define FRAME_WIDTH ({width})
#define FRAME_HEIGHT ({height})
#define FRAME_COUNT ({count})
#define FRAME_DELAY ({frame_delay})

const byte PROGMEM frames[][{bytes_per_frame}] = {{
"""

_LOOP = """

void setup() {{
  Serial.begin(9600);

  if(!display.begin(SSD1306_SWITCHCAPVCC, SCREEN_ADDRESS)) {{
    Serial.println(F("SSD1306 allocation failed"));
    for(;;);
  }}
}}

void loop() {{
  display.clearDisplay();
  display.drawBitmap({x}, {y}, frames[frame], FRAME_WIDTH, FRAME_HEIGHT, 1);
  display.display();
  frame = (frame + 1) % FRAME_COUNT;
  delay(FRAME_DELAY);
}}
"""


def render_sketch(
    frames: Sequence[FrameRecord],
    width: int,
    height: int,
    config: Optional[DisplayConfig] = None,
) -> str:
    """Arduino sketch with the frames as a PROGMEM table plus a playback loop."""
    if not frames:
        raise EmptyBatchError("No frames to write")
    config = config or DisplayConfig()
    x, y = config.offset(width, height)

    code = _HEADER.format(
        screen_width=config.screen_width,
        screen_height=config.screen_height,
        reset_pin=config.reset_pin,
        i2c_address=config.i2c_address,
        width=width,
        height=height,
        count=len(frames),
        bytes_per_frame=bytes_per_frame(width, height),
        frame_delay=config.frame_delay,
    )

    rows = []
    for index, record in enumerate(frames):
        # Line breaks in a filename would end the // comment early
        name = record.filename.replace("\r", " ").replace("\n", " ")
        rows.append(f"  // Frame {index}: {name}\n  {{{format_bytes(record.data)}}}")
    code += ",\n".join(rows) + "\n};\n"

    code += _LOOP.format(x=x, y=y)
    return code
