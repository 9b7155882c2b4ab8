"""
Module 09 - Vesting Migration API (FastAPI)

HTTP API for the vesting migration engine:
- GET  /health - Health check
- GET  /root - Active vesting window root
- GET  /windows/{leaf}/migrated - Amount migrated from one window
- GET  /accounts/{account}/non-vested - Remaining non-vested allowance
- POST /windows/preview - Claimable now for a window
- POST /migrate/vested - Proof-backed vested migration
- POST /migrate/non-vested - Allowance-backed migration
- POST /admin/root - Publish a new root
- POST /admin/non-vested - Increase an allowance

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
