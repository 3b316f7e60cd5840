import logging
import os

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("Starting Story Graph API Server...")
    print(f"Stories from: {os.environ.get('STORYGRAPH_ENDPOINT', 'built-in endpoint')}")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "backend.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
