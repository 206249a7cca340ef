# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Reverse proxy rule rendering."""

RULE_FILE_PREFIX = "sitedock-"
_PROXY_CONNECT_TIMEOUT = "60s"


def rule_filename(domain: str) -> str:
    """File name of the proxy rule for a domain."""
    return f"{RULE_FILE_PREFIX}{domain}.conf"


def render_proxy_rule(domain: str, port: int, timeout_seconds: int = 300) -> str:
    """Render the nginx server block forwarding domain to a local port."""
    port = int(port)
    timeout = f"{int(timeout_seconds)}s"
    return f"""# Managed by sitedock. Manual edits are overwritten on redeploy.
server {{
    listen 80;
    listen [::]:80;
    server_name {domain};

    client_max_body_size 100m;

    location / {{
        proxy_pass http://127.0.0.1:{port};
        proxy_http_version 1.1;

        proxy_set_header Host $host;
        proxy_set_header X-Real-IP $remote_addr;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
        proxy_set_header X-Forwarded-Proto $scheme;

        proxy_set_header Upgrade $http_upgrade;
        proxy_set_header Connection "upgrade";

        proxy_connect_timeout {_PROXY_CONNECT_TIMEOUT};
        proxy_send_timeout {timeout};
        proxy_read_timeout {timeout};
    }}
}}
"""
