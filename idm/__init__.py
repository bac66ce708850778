"""
Package marker for the identity management service under `idm`.
It groups the HTTP layer, services, repositories, and shared runtime helpers under one import path.
Most functionality lives in the sibling packages; this file stays lightweight.
"""
