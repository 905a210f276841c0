"""Adapters binding the core to the paste service and host daemons."""
