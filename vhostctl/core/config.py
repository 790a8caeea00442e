from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """系统配置"""

    model_config = SettingsConfigDict(env_prefix="VHOSTCTL_", case_sensitive=True)

    # 项目信息
    PROJECT_NAME: str = "vhostctl"

    # 路径配置
    WWW_ROOT: str = "/var/www"
    HOSTS_FILE: str = "/etc/hosts"
    HOSTS_IP: str = "127.0.0.1"
    PLACEHOLDER_FILE: str = "phpinfo.php"

    # Nginx
    NGINX_SITES_AVAILABLE: str = "/etc/nginx/sites-available"
    NGINX_SITES_ENABLED: str = "/etc/nginx/sites-enabled"
    NGINX_LOG_DIR: str = "/var/log/nginx"
    NGINX_SERVICE: str = "nginx"
    # unix:/run/php/php8.1-fpm.sock also works
    PHP_FPM_SOCKET: str = "127.0.0.1:9000"

    # Apache
    APACHE_SITES_AVAILABLE: str = "/etc/apache2/sites-available"
    APACHE_SITES_ENABLED: str = "/etc/apache2/sites-enabled"
    APACHE_LOG_DIR: str = "${APACHE_LOG_DIR}"
    APACHE_SERVICE: str = "apache2"
    SERVER_ADMIN: str = "webmaster@localhost"

    # 权限
    WEB_USER: str = "www-data"
    WEB_GROUP: str = "www-data"

    # 命令超时(秒)
    COMMAND_TIMEOUT: int = 60

    # 日志
    LOG_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"


# 创建设置实例
settings = Settings()
