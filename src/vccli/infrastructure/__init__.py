"""
Infrastructure modules for the vCenter session client.

This package contains the HTTP-facing pieces: session endpoint calls, the
authentication adapter and the client.
"""
