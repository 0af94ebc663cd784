"""
Cross-app test suite for the VetConnect backend.

Test Organization:
- integration/ - end-to-end API flows that span several apps
- App-specific tests live beside their app (e.g., appointments/test_appointment_api.py)
"""
