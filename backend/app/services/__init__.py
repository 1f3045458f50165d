"""
Wedding Invitations Backend — Services Layer
==============================================

What:  Business logic between routes (HTTP) and the DataGateway (SQL).

Service Inventory:
    - credentials:           PBKDF2 password hashing
    - token_service:         JWT issue / verify, bearer header parsing
    - code_generator:        invitation and confirmation codes, date formatting
    - qr_payload:            QR payload build / decode, optional HMAC signing
    - gateway:               DataGateway, the only code that issues queries
    - auth_service:          register, login, verify, me
    - invitation_service:    invitation CRUD and the public view
    - confirmation_service:  RSVP upsert, listing, check-in

Domain services are constructed per request by app.dependencies with the
request's gateway; none of them hold module-level state.
"""
