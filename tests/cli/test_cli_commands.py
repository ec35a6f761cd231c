"""
Tests for CLI Commands

Tests the build and watch commands and the top-level options.
"""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from arcsite import __version__
from arcsite.cli.main import app as main_app


@pytest.fixture(autouse=True)
def quiet_cli(tmp_path, monkeypatch):
    """Run from an empty directory and leave logging configuration alone."""
    monkeypatch.chdir(tmp_path)
    with patch('arcsite.cli.commands.build.setup_logging'), \
            patch('arcsite.cli.commands.watch.setup_logging'):
        yield


@pytest.mark.cli
class TestMainApp:
    """Test top-level CLI behaviour."""

    def setup_method(self):
        """Set up test environment for each test."""
        self.runner = CliRunner()

    def test_version(self):
        """Test --version prints the version and exits."""
        result = self.runner.invoke(main_app, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_lists_commands(self):
        """Test help output names both commands."""
        result = self.runner.invoke(main_app, ['--help'])
        assert result.exit_code == 0
        assert "build" in result.stdout
        assert "watch" in result.stdout


@pytest.mark.cli
class TestBuildCommand:
    """Test the build command."""

    def setup_method(self):
        """Set up test environment for each test."""
        self.runner = CliRunner()

    def test_build(self, sample_site):
        """Test a successful build."""
        site_dir = sample_site.parent / "site"
        result = self.runner.invoke(main_app, [
            'build', '--app-dir', str(sample_site), '--site-dir', str(site_dir)
        ])

        assert result.exit_code == 0
        assert "Generated 4 documents" in result.stdout
        assert (site_dir / "index.html").is_file()
        assert (site_dir / "feed.xml").is_file()

    def test_build_uses_site_config(self, sample_site):
        """Test site.config values reach the templates."""
        site_dir = sample_site.parent / "site"
        self.runner.invoke(main_app, ['build', '-a', str(sample_site), '-o', str(site_dir)])

        about = (site_dir / "about.html").read_text(encoding='utf-8')
        assert "<header>Test Site</header>" in about
        assert "<footer>Tester</footer>" in about

    def test_build_without_rss(self, sample_site):
        """Test --no-rss skips the feed."""
        site_dir = sample_site.parent / "site"
        result = self.runner.invoke(main_app, [
            'build', '--app-dir', str(sample_site), '--site-dir', str(site_dir), '--no-rss'
        ])

        assert result.exit_code == 0
        assert not (site_dir / "feed.xml").exists()

    def test_build_error_exits_nonzero(self, sample_site):
        """Test a failing document produces an error panel and exit code 1."""
        (sample_site / "templates" / "page.html").unlink()
        result = self.runner.invoke(main_app, [
            'build', '--app-dir', str(sample_site), '--site-dir', str(sample_site.parent / "site")
        ])

        assert result.exit_code == 1
        assert "TemplateNotFoundError" in result.output

    def test_missing_config_file(self, tmp_path):
        """Test a named configuration file that does not exist."""
        result = self.runner.invoke(main_app, ['build', '--config', str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "ConfigurationError" in result.output

    def test_unknown_markdown_extension(self, sample_site, monkeypatch):
        """Test a misspelled Markdown extension produces an error panel."""
        monkeypatch.setenv("ARCSITE_MARKDOWN_EXTENSIONS", "tabels")
        result = self.runner.invoke(main_app, [
            'build', '--app-dir', str(sample_site), '--site-dir', str(sample_site.parent / "site")
        ])

        assert result.exit_code == 1
        assert "ConfigurationError" in result.output
        assert not isinstance(result.exception, ImportError)

    def test_config_file(self, sample_site, tmp_path):
        """Test options from a configuration file."""
        config_file = tmp_path / "arcsite.yaml"
        config_file.write_text(
            f"build:\n  app_dir: {sample_site}\n  site_dir: {tmp_path / 'public'}\n"
        )
        result = self.runner.invoke(main_app, ['build', '-c', str(config_file)])

        assert result.exit_code == 0
        assert (tmp_path / "public" / "about.html").is_file()


@pytest.mark.cli
class TestWatchCommand:
    """Test the watch command."""

    def setup_method(self):
        """Set up test environment for each test."""
        self.runner = CliRunner()

    @patch('arcsite.cli.commands.watch.SiteWatcher')
    def test_watch_configures_watcher(self, mock_watcher_class, sample_site):
        """Test the watcher is created from the configuration."""
        site_dir = sample_site.parent / "public"
        result = self.runner.invoke(main_app, [
            'watch', '--app-dir', str(sample_site), '--site-dir', str(site_dir), '--debounce', '0.5'
        ])

        assert result.exit_code == 0
        args, kwargs = mock_watcher_class.call_args
        assert args[0] == sample_site
        assert kwargs['ignored_dirs'] == ["public"]
        assert kwargs['debounce'] == 0.5
        mock_watcher_class.return_value.watch.assert_called_once()

    @patch('arcsite.cli.commands.watch.SiteWatcher')
    def test_rebuild_callback_generates_site(self, mock_watcher_class, sample_site):
        """Test the callback handed to the watcher builds the site."""
        site_dir = sample_site.parent / "site"
        self.runner.invoke(main_app, ['watch', '--app-dir', str(sample_site), '--site-dir', str(site_dir)])

        regenerate = mock_watcher_class.call_args[0][1]
        regenerate()
        assert (site_dir / "posts" / "second-post.html").is_file()

    @patch('arcsite.cli.commands.watch.SiteWatcher')
    def test_keyboard_interrupt(self, mock_watcher_class, sample_site):
        """Test Ctrl+C stops the watcher."""
        watcher = mock_watcher_class.return_value
        watcher.watch.side_effect = KeyboardInterrupt

        result = self.runner.invoke(main_app, ['watch', '--app-dir', str(sample_site)])

        assert result.exit_code == 1
        watcher.stop.assert_called_once()
        assert "cancelled" in result.stdout

    def test_missing_watch_directory(self, tmp_path):
        """Test watching a directory that does not exist."""
        result = self.runner.invoke(main_app, ['watch', '--app-dir', str(tmp_path / "nope")])
        assert result.exit_code == 1
