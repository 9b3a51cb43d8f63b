import logging

import uvicorn
from weekend.api.api_run import app
from weekend.utilities.backup import auto_backup
from weekend.utilities.config import APP_HOST, APP_PORT, DEBUG
from weekend.utilities.network import banner_urls


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO)
    # snapshot of the saved plans before this session changes them
    auto_backup()

    local_url, *lan_urls = banner_urls(APP_PORT)
    print(f"Uvicorn running on {local_url} (Press CTRL+C to quit)")
    for lan_url in lan_urls:
        print(f"Accessible from other devices at: {lan_url}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
