import os
from typing import Tuple

from vhostctl.core.exceptions import AlreadyEnabledError
from vhostctl.core.logger import setup_logger
from vhostctl.services.base_service import VirtualHostService

logger = setup_logger(__name__)

APACHE_TEMPLATE = """<VirtualHost *:80>
    ServerAdmin %(admin)s
    ServerName %(domain)s
    ServerAlias %(domain)s

    DocumentRoot %(root)s

    <Directory %(root)s>
        Options Indexes FollowSymLinks MultiViews
        AllowOverride All
        Require all granted
    </Directory>

    ErrorLog %(log_dir)s/%(domain)s-error.log
    CustomLog %(log_dir)s/%(domain)s-access.log combined
</VirtualHost>
"""


class ApacheService(VirtualHostService):
    """Apache站点管理, 通过 a2ensite / a2dissite 启用"""

    flavour = "apache"

    @property
    def service_name(self) -> str:
        return self.settings.APACHE_SERVICE

    @property
    def test_command(self):
        return ["apache2ctl", "configtest"]

    def site_name(self, domain: str) -> str:
        return f"{domain}.conf"

    def config_path(self, domain: str) -> str:
        return os.path.join(self.settings.APACHE_SITES_AVAILABLE, self.site_name(domain))

    def enabled_path(self, domain: str) -> str:
        return os.path.join(self.settings.APACHE_SITES_ENABLED, self.site_name(domain))

    def render_config(self, domain: str, root_dir: str) -> str:
        """生成VirtualHost配置"""
        return APACHE_TEMPLATE % {
            "admin": self.settings.SERVER_ADMIN,
            "domain": domain,
            "root": root_dir,
            "log_dir": self.settings.APACHE_LOG_DIR,
        }

    def ownership(self, owner: str) -> Tuple[str, str]:
        return owner, owner

    async def enable_site(self, domain: str):
        if self.is_enabled(domain):
            raise AlreadyEnabledError(self.enabled_path(domain))
        await self.runner(["a2ensite", self.site_name(domain)])
        logger.info(f"Enabled site {domain}")

    async def disable_site(self, domain: str):
        if not self.is_enabled(domain):
            logger.info(f"Site not enabled: {self.enabled_path(domain)}")
            return
        await self.runner(["a2dissite", self.site_name(domain)])
        logger.info(f"Disabled site {domain}")
