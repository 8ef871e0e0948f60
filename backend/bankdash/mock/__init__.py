"""Mock data package for the banking dashboard gateway.

Sample banking data served whenever the gateway routes a call away from
the live backend (forced mock mode, failed health probe, or a network
failure mid-session).

Contents:
    fixtures.py  — Static sample records (customers, accounts, transactions, KYC, tickets)
    factory.py   — Builders for records created by mock writes, plus mock JWTs
    latency.py   — delay() / delayed_error() timing helpers

Called by: core/adapters/mock_backend.py
Depends on: PyJWT (factory.py only)
"""
