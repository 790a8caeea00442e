import os
from typing import Tuple

from vhostctl.core.exceptions import AlreadyEnabledError
from vhostctl.core.logger import setup_logger
from vhostctl.services.base_service import VirtualHostService

logger = setup_logger(__name__)

NGINX_TEMPLATE = r"""server {
    listen 80;
    server_name %(domain)s;
    root %(root)s;

    index index.php index.html index.htm;

    # Serve static files directly with caching
    location ~* \.(jpg|jpeg|gif|css|png|js|ico|html|svg|woff|woff2|ttf)$ {
        access_log off;
        expires max;
        add_header Cache-Control "public";
    }

    # Try files, fallback to index.php
    location / {
        try_files $uri $uri/ /index.php?$query_string;
    }

    # PHP-FPM handling
    location ~ \.php$ {
        include fastcgi_params;
        fastcgi_split_path_info ^(.+\.php)(/.+)$;
        fastcgi_param SCRIPT_FILENAME $document_root$fastcgi_script_name;
        fastcgi_pass %(upstream)s;
        fastcgi_index index.php;
    }

    # Deny access to hidden files
    location ~ /\. {
        deny all;
    }

    error_log %(log_dir)s/%(domain)s_error.log;
    access_log %(log_dir)s/%(domain)s_access.log;
}
"""


class NginxService(VirtualHostService):
    """Nginx站点管理, 通过 sites-enabled 软链接启用"""

    flavour = "nginx"

    @property
    def service_name(self) -> str:
        return self.settings.NGINX_SERVICE

    @property
    def test_command(self):
        return ["nginx", "-t"]

    def config_path(self, domain: str) -> str:
        return os.path.join(self.settings.NGINX_SITES_AVAILABLE, domain)

    def enabled_path(self, domain: str) -> str:
        return os.path.join(self.settings.NGINX_SITES_ENABLED, domain)

    def render_config(self, domain: str, root_dir: str) -> str:
        """生成站点配置"""
        return NGINX_TEMPLATE % {
            "domain": domain,
            "root": root_dir,
            "upstream": self.settings.PHP_FPM_SOCKET,
            "log_dir": self.settings.NGINX_LOG_DIR,
        }

    def ownership(self, owner: str) -> Tuple[str, str]:
        return owner, self.settings.WEB_GROUP

    async def enable_site(self, domain: str):
        link_path = self.enabled_path(domain)
        if self.is_enabled(domain):
            raise AlreadyEnabledError(link_path)
        os.symlink(self.config_path(domain), link_path)
        logger.info(f"Enabled site: {link_path}")

    async def disable_site(self, domain: str):
        link_path = self.enabled_path(domain)
        if self.is_enabled(domain):
            os.remove(link_path)
            logger.info(f"Disabled site: {link_path}")
        else:
            logger.info(f"Site not enabled: {link_path}")
