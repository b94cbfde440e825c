# Services package init
"""
Vehicle Registry Backend — Services Layer
===========================================

Service Inventory:
    - VehicleService: the in-memory record store (add, count, clear)

Services take a database session per call and hold no request state, so
they can be unit-tested with a mocked session and no HTTP layer.
"""
