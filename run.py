import os

import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    # Single worker: dataset session and learned synonym tables live in
    # process memory, so every request must hit the same process.
    uvicorn.run(
        "vehicle_validation.main:app",
        host="0.0.0.0",
        port=port,
        workers=1,
    )
