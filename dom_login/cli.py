import sys
from typing import Optional, Callable

import click
from selenium.common.exceptions import WebDriverException

from .browser import BrowserSession, create_driver
from .credential_manager import CredentialManager
from .exceptions import DomAutomationError
from .flows import LoginFlowController, FlowResult
from .telemetry import TelemetryLog
from .utils import load_config, setup_logging, mask_mobile

# Login pages render their inputs late; flows start once one is present
PAGE_READY_SELECTOR = 'input'


def _echo_progress(status: str):
    click.echo(f"  ⏳ {status}")


def _print_telemetry(telemetry: TelemetryLog):
    click.echo("\n📋 Telemetry:")
    for event in telemetry.get_events():
        click.echo(f"  {event.timestamp} [{event.kind}] {event.message}")
        error = event.data.get('error')
        if error:
            click.echo(f"      error: {error}")


def run_flow(ctx: click.Context, flow: Callable[[LoginFlowController], FlowResult]):
    """Open the login page, run one flow against it and exit with its status."""
    options = ctx.obj
    config = options['config']

    if not config.login_url:
        raise click.UsageError("No login URL. Pass --url or set DOM_LOGIN_URL.")

    telemetry = TelemetryLog()
    try:
        with BrowserSession(config.browser, driver_factory=options['driver_factory']) as driver:
            driver.get(config.login_url)
            controller = LoginFlowController(driver, config, telemetry=telemetry)
            controller.resolver.wait_for(PAGE_READY_SELECTOR)
            result = flow(controller)
    except (DomAutomationError, WebDriverException) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if options['show_telemetry']:
        _print_telemetry(telemetry)

    if result.success:
        click.echo(f"✅ {result.message}")
        sys.exit(0)
    click.echo(f"❌ {result.error}", err=True)
    sys.exit(1)


@click.group()
@click.option('--url', '-u', type=str, help='Login page URL')
@click.option('--config', '-c', 'config_path', type=click.Path(), default='config.yaml',
              help='Configuration file path')
@click.option('--headless/--no-headless', default=None, help='Run the browser headless')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--show-telemetry', is_flag=True, help='Print the telemetry log after the flow')
@click.pass_context
def main(ctx, url: Optional[str], config_path: str, headless: Optional[bool],
         verbose: bool, show_telemetry: bool):
    """Human-paced login automation for mobile-number portals."""
    config = load_config(config_path)

    logging_config = dict(config.logging_config)
    if verbose:
        logging_config['level'] = 'DEBUG'
    setup_logging(logging_config)

    if url:
        config.login_url = url
    if headless is not None:
        config.browser['headless'] = headless

    ctx.ensure_object(dict)
    ctx.obj.setdefault('driver_factory', create_driver)
    ctx.obj.setdefault('credentials', CredentialManager())
    ctx.obj['config'] = config
    ctx.obj['show_telemetry'] = show_telemetry


@main.command()
@click.option('--mobile', '-m', type=str, help='Mobile number')
@click.option('--password', '-p', type=str, help='Account password')
@click.pass_context
def login(ctx, mobile: Optional[str], password: Optional[str]):
    """Log in with mobile number and password."""
    credentials = _get_credentials(ctx, mobile, password)
    click.echo(f"🔐 Logging in as {mask_mobile(credentials.mobile)}")
    run_flow(ctx, lambda controller: controller.login_with_password(
        credentials.mobile, credentials.password, _echo_progress))


@main.command('send-otp')
@click.option('--mobile', '-m', type=str, help='Mobile number')
@click.pass_context
def send_otp(ctx, mobile: Optional[str]):
    """Request a one-time code for the mobile number."""
    credentials = _get_credentials(ctx, mobile, None, require_password=False)
    click.echo(f"📨 Requesting OTP for {mask_mobile(credentials.mobile)}")
    run_flow(ctx, lambda controller: controller.send_otp(credentials.mobile, _echo_progress))


@main.command('login-otp')
@click.option('--mobile', '-m', type=str, help='Mobile number')
@click.option('--password', '-p', type=str, help='Account password')
@click.option('--otp', type=str, help='One-time code (prompted when omitted)')
@click.pass_context
def login_otp(ctx, mobile: Optional[str], password: Optional[str], otp: Optional[str]):
    """Complete a login with a one-time code."""
    credentials = _get_credentials(ctx, mobile, password)
    if not otp:
        otp = click.prompt("📱 Enter the code sent to your phone", type=str)
    run_flow(ctx, lambda controller: controller.login_with_otp(
        credentials.mobile, credentials.password, otp.strip(), _echo_progress))


def _get_credentials(ctx, mobile, password, require_password: bool = True):
    try:
        return ctx.obj['credentials'].get_credentials(mobile, password, require_password=require_password)
    except DomAutomationError as e:
        raise click.UsageError(str(e))


if __name__ == '__main__':
    main()
