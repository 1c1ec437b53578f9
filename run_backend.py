#!/usr/bin/env python3
"""Start the Building Estimator API server.

Host and port come from ESTIMATOR_HOST / ESTIMATOR_PORT (default 0.0.0.0:8000).
"""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "estimator.api.main:app",
        host=os.getenv("ESTIMATOR_HOST", "0.0.0.0"),
        port=int(os.getenv("ESTIMATOR_PORT", "8000")),
        reload=True,
        reload_dirs=["estimator"],
        log_config=None,
    )
