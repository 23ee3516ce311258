"""SSD1306 OLED framebuffer, drawing and text toolkit with an MQTT room-control menu."""

__version__ = "0.1.0"