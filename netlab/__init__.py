"""Socket exercises: distance-vector routing, Fibonacci, reversal service, chat, ARQ and broadcast chat."""

__version__ = "0.1.0"