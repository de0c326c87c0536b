"""
API Layer - REST and Socket.IO interfaces to the driver window

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
- socketio/   : Presentation channel bridge for browser audience windows
"""

from api.main import create_app

__all__ = ["create_app"]
