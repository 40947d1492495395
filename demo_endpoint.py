"""
Local runner for the Receipt Ledger API.

Starts the server and shows how the chat transport forwards images to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Receipt Ledger Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Intake:        POST http://localhost:8000/intake")
    print("   - API Docs:           http://localhost:8000/docs")
    print("   - ReDoc:              http://localhost:8000/redoc")
    print()
    print("📝 Test with curl (manual upload, chat filters skipped):")
    print('   curl -X POST "http://localhost:8000/intake" \\')
    print('     -F "image=@/path/to/pix.jpg;type=image/jpeg"')
    print()
    print("💬 As the chat transport would send it:")
    print('   curl -X POST "http://localhost:8000/intake" \\')
    print('     -F "image=@/path/to/pix.jpg;type=image/jpeg" \\')
    print('     -F "chat_id=120363000000000000@g.us" \\')
    print('     -F "timestamp=$(date +%s)"')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "receipt_ledger.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
