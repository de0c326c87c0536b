"""
API Routes - HTTP endpoint handlers

Each area (presentation, animations, preview, system) gets its own router;
api.main includes them all under /api/v1.
"""
