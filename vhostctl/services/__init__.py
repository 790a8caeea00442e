from vhostctl.services.apache_service import ApacheService
from vhostctl.services.hosts_service import HostsFile
from vhostctl.services.nginx_service import NginxService

__all__ = ["ApacheService", "HostsFile", "NginxService"]
