"""
thread-runner - forward a prompt to a remote agent thread and capture the reply.
"""

__version__ = "0.1.0"
