import asyncio
from typing import Optional, Type

import typer

from vhostctl import __version__
from vhostctl.core import config
from vhostctl.core.exceptions import UsageError, VhostError
from vhostctl.core.logger import setup_logger
from vhostctl.schemas.vhost import Action, VirtualHostRequest
from vhostctl.services import ApacheService, NginxService
from vhostctl.services.base_service import VirtualHostService
from vhostctl.utils.privileges import require_root

logger = setup_logger(__name__)

EPILOG = """Examples:

  sudo %(prog)s create example.test          # root /var/www/exampletest

  sudo %(prog)s create example.test site1    # root /var/www/site1

  sudo %(prog)s delete example.test
"""


def _confirmer(assume_yes: bool):
    if assume_yes:
        return lambda prompt: True

    def confirm(prompt: str) -> bool:
        """只有 y / Y 视为同意, 其它输入及EOF均保留"""
        try:
            answer = typer.prompt(f"{prompt} [y/N]", default="", show_default=False)
        except typer.Abort:
            typer.echo()
            return False
        return answer.strip() in ("y", "Y")

    return confirm


def _version(value: bool):
    if value:
        typer.echo(f"{config.settings.PROJECT_NAME} {__version__}")
        raise typer.Exit()


def run(
    ctx: typer.Context,
    service_cls: Type[VirtualHostService],
    action: str,
    domain: str,
    root_dir: Optional[str] = None,
    assume_yes: bool = False
):
    """校验参数并执行操作, 错误转换为退出码"""
    try:
        require_root()
        request = VirtualHostRequest.from_args(action, domain, root_dir)
        service = service_cls(settings=config.settings, confirm=_confirmer(assume_yes))
        result = asyncio.run(service.execute(request))
    except UsageError as e:
        typer.echo(f"ERROR: {e.message}", err=True)
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(code=e.exit_code)
    except VhostError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        typer.echo(f"ERROR: {e.message}", err=True)
        raise typer.Exit(code=e.exit_code)
    except OSError as e:
        logger.error(f"Filesystem operation failed: {e}")
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(result.message)


def make_app(service_cls: Type[VirtualHostService], prog: str, help_text: str) -> typer.Typer:
    app = typer.Typer(add_completion=False, help=help_text, epilog=EPILOG % {"prog": prog})

    @app.command()
    def main(
        ctx: typer.Context,
        action: Action = typer.Argument(..., help="create or delete"),
        domain: str = typer.Argument(..., help="Domain name, letters, digits, '.' and '-' only"),
        root_dir: Optional[str] = typer.Argument(
            None, help="Document root, absolute or relative to the web root"
        ),
        yes: bool = typer.Option(
            False, "--yes", "-y", help="Delete the document root without asking"
        ),
        version: bool = typer.Option(
            False, "--version", callback=_version, is_eager=True, help="Print version and exit"
        ),
    ):
        run(ctx, service_cls, action.value, domain, root_dir, yes)

    return app


nginx_app = make_app(
    NginxService, "nginx-vhost", "Create or delete an nginx virtual host."
)
apache_app = make_app(
    ApacheService, "apache-vhost", "Create or delete an Apache virtual host."
)


def nginx_main():
    nginx_app(prog_name="nginx-vhost")


def apache_main():
    apache_app(prog_name="apache-vhost")
