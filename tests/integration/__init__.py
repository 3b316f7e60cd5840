"""
Integration Tests Package

Whole-session and HTTP API tests over in-memory story endpoints.

TEST AXIOMS:
=============
1. One fetch per session; its outcome decides READY or FAILED
2. Selection changes only through dispatched events
3. Dangling references and blocked exports never break the session
"""
