"""Media device driver registry, raw frame decoders and a VNC client."""

__version__ = "0.1.0"