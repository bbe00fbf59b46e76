"""Application layer: ports, record mapping and use cases."""
