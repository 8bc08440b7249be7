"""
Unit tests for the command-line interface and browser host
"""
import pytest
from click.testing import CliRunner
from unittest.mock import Mock, patch
from selenium.common.exceptions import TimeoutException, WebDriverException

from dom_login import scripts
from dom_login.browser import BrowserSession, build_chrome_options, create_driver
from dom_login.cli import main
from dom_login.credential_manager import CredentialManager
from dom_login.exceptions import BrowserSetupError


class TestCli:
    """Test dom-login commands against a fake page"""

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch, timing):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv('DOM_LOGIN_URL', raising=False)
        monkeypatch.delenv('LOG_LEVEL', raising=False)
        monkeypatch.setattr('dom_login.flows.default_timing', timing)
        monkeypatch.setattr('dom_login.cli.setup_logging', Mock())

    def _invoke(self, page, args, input=None):
        runner = CliRunner()
        obj = {'driver_factory': lambda browser_config: page, 'credentials': CredentialManager()}
        return runner.invoke(main, args, obj=obj, input=input)

    def test_login_success(self, login_page):
        login_page.button.on_click = lambda: login_page.set_storage_later('access_token', 'T', 500)

        result = self._invoke(login_page, ['--url', 'https://portal.example/login',
                                           'login', '-m', '01700000000', '-p', 'pw'])

        assert result.exit_code == 0
        assert 'Login successful' in result.output
        assert '********000' in result.output
        assert login_page.visited == ['https://portal.example/login']
        assert login_page.quit_called

    def test_login_failure_exit_code(self, page):
        page.add('input', ['input[type="password"]'])

        result = self._invoke(page, ['--url', 'https://portal.example/login',
                                     'login', '-m', '01700000000', '-p', 'pw'])

        assert result.exit_code == 1
        assert 'Mobile number field not found on page' in result.output

    def test_show_telemetry(self, page):
        page.add('input', ['input[type="tel"]'])

        result = self._invoke(page, ['--url', 'https://portal.example/login', '--show-telemetry',
                                     'send-otp', '-m', '01700000000'])

        assert result.exit_code == 1
        assert '[error] OTP request failed' in result.output

    def test_send_otp(self, page):
        page.add('input', ['input[name="mobile_no"]'])
        page.add('button', text='Send OTP')

        result = self._invoke(page, ['--url', 'https://portal.example/login',
                                     'send-otp', '-m', '01700000000'])

        assert result.exit_code == 0
        assert 'OTP request sent' in result.output

    def test_login_otp_prompts_for_code(self, page):
        otp = page.add('input', ['input[name="otp"]'])
        button = page.add('button', ['button[type="submit"]'])
        button.on_click = lambda: page.set_storage_later('access_token', 'T')

        result = self._invoke(page, ['--url', 'https://portal.example/login',
                                     'login-otp', '-m', '01700000000', '-p', 'pw'],
                              input='654321\n')

        assert result.exit_code == 0
        assert otp.value == '654321'
        assert 'OTP login successful' in result.output

    def test_page_without_inputs(self, page):
        result = self._invoke(page, ['--url', 'https://portal.example/login',
                                     'login', '-m', '01700000000', '-p', 'pw'])

        assert result.exit_code == 1
        assert 'Element not found: input' in result.output
        assert page.quit_called

    def test_page_load_failure(self, page, monkeypatch):
        page.add('input', ['input[name="mobile_no"]'])
        monkeypatch.setattr(page, 'get', Mock(side_effect=TimeoutException('page load timed out')))

        result = self._invoke(page, ['--url', 'https://portal.example/login',
                                     'login', '-m', '01700000000', '-p', 'pw'])

        assert result.exit_code == 1
        assert '❌' in result.output
        assert 'page load timed out' in result.output
        assert page.quit_called

    def test_log_level_from_environment(self, page, monkeypatch):
        configure = Mock()
        monkeypatch.setattr('dom_login.cli.setup_logging', configure)
        monkeypatch.setenv('LOG_LEVEL', 'INFO')

        self._invoke(page, ['--url', 'https://portal.example/login',
                            'send-otp', '-m', '01700000000'])

        configure.assert_called_once_with({'level': 'INFO'})

    def test_verbose_overrides_log_level(self, page, monkeypatch):
        configure = Mock()
        monkeypatch.setattr('dom_login.cli.setup_logging', configure)
        monkeypatch.setenv('LOG_LEVEL', 'ERROR')

        self._invoke(page, ['--url', 'https://portal.example/login', '--verbose',
                            'send-otp', '-m', '01700000000'])

        configure.assert_called_once_with({'level': 'DEBUG'})

    def test_missing_url(self, page):
        result = self._invoke(page, ['login', '-m', '01700000000', '-p', 'pw'])

        assert result.exit_code == 2
        assert 'No login URL' in result.output


class TestBrowser:
    """Test WebDriver creation"""

    def test_headless_options(self):
        options = build_chrome_options({'headless': True, 'window_size': (800, 600)})

        assert '--headless=new' in options.arguments
        assert '--window-size=800,600' in options.arguments

    def test_create_driver_hides_webdriver_flag(self):
        driver = Mock()
        with patch('dom_login.browser.ChromeDriverManager') as manager, \
             patch('dom_login.browser.webdriver.Chrome', return_value=driver):
            manager.return_value.install.return_value = '/tmp/chromedriver'
            assert create_driver({'timeout': 12}) is driver

        driver.set_page_load_timeout.assert_called_once_with(12)
        driver.execute_script.assert_called_once_with(scripts.HIDE_WEBDRIVER_FLAG)

    def test_create_driver_failure(self):
        with patch('dom_login.browser.ChromeDriverManager') as manager, \
             patch('dom_login.browser.webdriver.Chrome', side_effect=WebDriverException('no chrome')):
            manager.return_value.install.return_value = '/tmp/chromedriver'
            with pytest.raises(BrowserSetupError):
                create_driver()

    def test_setup_script_failure_quits_chrome(self):
        driver = Mock()
        driver.execute_script.side_effect = WebDriverException('javascript disabled')
        with patch('dom_login.browser.ChromeDriverManager') as manager, \
             patch('dom_login.browser.webdriver.Chrome', return_value=driver):
            manager.return_value.install.return_value = '/tmp/chromedriver'
            with pytest.raises(BrowserSetupError):
                create_driver()

        driver.quit.assert_called_once()

    def test_session_quits_driver(self):
        driver = Mock()
        with BrowserSession({'headless': True}, driver_factory=lambda config: driver) as active:
            assert active is driver
        driver.quit.assert_called_once()
