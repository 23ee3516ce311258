[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oledhome"
version = "0.1.0"
description = "SSD1306 OLED framebuffer, drawing and text toolkit with a two-button room control menu synced over MQTT"
requires-python = ">=3.10"
dependencies = [
    "paho-mqtt>=1.6",
]
keywords = ["ssd1306", "oled", "framebuffer", "mqtt", "home automation", "menu"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
oledhome = "oledhome.app:main"

[tool.hatch.build.targets.wheel]
packages = ["oledhome"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
