"""
Media Layer.

This package sits between the audio stream and its consumer: it reads ahead
of playback into a bounded buffer.
"""

from .prefetch import PrefetchBuffer

__all__ = ["PrefetchBuffer"]
