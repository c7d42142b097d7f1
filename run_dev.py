#!/usr/bin/env python3
"""
Raz Development Server
Runs Flask on port 5000 with debug output and rate limiting off
"""
import os

from raz_app import create_app

if __name__ == '__main__':
    os.environ.setdefault('DEBUG_LOGGING', 'true')
    app = create_app({'DISABLE_RATE_LIMITING': True})
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=True,
        use_reloader=False
    )
