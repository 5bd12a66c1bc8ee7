"""netgen -- network service scaffolding generator.

Turns a YAML description of a TCP echo server, a TCP worker-pool server or a
FastAPI HTTP service into a ready-to-build project tree.
"""

__version__ = "0.3.0"
