import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).resolve().parent))
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

if __name__ == "__main__":
    from config import settings
    from main import app
    # workers=1: engine state lives in this process
    uvicorn.run(app, host="0.0.0.0", port=settings.port, workers=1)
