"""Core domain package for largetextpaste.

Core contains the offload decision, upload workflow, and rewrite policy
without any HTTP or host-daemon specific code, keeping the logic portable.
"""
