"""
CLI (Command Line Interface) for the z/OSMF client.

This is a thin wrapper around the engine. All business logic lives
in the zos_engine package so it can be reused from Python code.
"""
