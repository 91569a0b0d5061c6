"""Uppercase hex rendering for raw and payload views."""


def encode(data):
    return bytes(data).hex().upper()
