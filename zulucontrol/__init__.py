"""Device status, image listing, UI state machine and I2C control for an IDE drive emulator."""

__version__ = "0.1.0"