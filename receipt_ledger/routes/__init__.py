"""
FastAPI routers for all API endpoints.

- intake: receipt images forwarded by the chat transport
- health: public status and intake counters
"""
