"""
Unit tests for the CLI module.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from search_gwas.cli import build_query, configure_logging, main, parse_args
from search_gwas.config import SIGNIFICANCE_THRESHOLD
from search_gwas.exceptions import ConfigurationError, FetchError, FetchErrorKind, ParseError, ParseErrorKind


class TestCLI:
    """Test the CLI module."""

    def test_parse_args_trait_minimal(self):
        """Test parse_args with minimal trait arguments."""
        args = parse_args(['trait', 'hypothyroidism'])

        assert args.command == 'trait'
        assert args.trait == 'hypothyroidism'
        assert args.gene == []
        assert not args.with_associations
        assert not args.with_pubmed_links
        assert not args.csv
        assert not args.summary
        assert args.max_p_value is None
        assert args.force == 0
        assert args.verbose == 0
        assert args.data_dir is None

    def test_parse_args_trait_full(self):
        """Test parse_args with every trait option."""
        args = parse_args([
            '-vv', '--data-dir', 'custom_data', '--timeout', '5',
            'trait', 'hypothyroidism',
            '-g', 'TSHR', '--gene', 'COL5A2,BRCA1',
            '-a', '-l', '-c', '-s', '--significant', '-f',
        ])

        assert args.verbose == 2
        assert args.data_dir == Path('custom_data')
        assert args.timeout == 5.0
        assert args.gene == ['TSHR', 'COL5A2,BRCA1']
        assert args.with_associations
        assert args.with_pubmed_links
        assert args.csv
        assert args.summary
        assert args.max_p_value == SIGNIFICANCE_THRESHOLD
        assert args.force == 1

    def test_parse_args_from_sys_argv(self):
        """Test parse_args reading sys.argv."""
        with patch('sys.argv', ['search-gwas', 'update', '-ff']):
            args = parse_args()

        assert args.command == 'update'
        assert args.force == 2

    def test_significance_options_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(['trait', 'x', '--significant', '--max-p-value', '0.01'])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_build_query(self):
        args = parse_args(['trait', '  Hypothyroidism ', '-g', 'tshr, col5a2', '-g', 'TSHR', '-c',
                           '--max-p-value', '1e-6'])
        query = build_query(args)

        assert query.trait_substring == 'Hypothyroidism'
        assert query.genes == ('TSHR', 'COL5A2')
        assert query.as_csv
        assert not query.show_full
        assert query.max_p_value == 1e-6

    def test_configure_logging_levels(self):
        configure_logging(0, "ERROR")
        assert logging.getLogger().level == logging.ERROR
        configure_logging(1, "ERROR")
        assert logging.getLogger().level == logging.INFO
        configure_logging(2, "ERROR")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_unknown_level(self):
        with pytest.raises(ConfigurationError):
            configure_logging(0, "CHATTY")


class TestMain:
    """Exit codes and error reporting."""

    @pytest.fixture(autouse=True)
    def isolated_env(self, monkeypatch, data_dir):
        monkeypatch.setenv("SEARCH_GWAS_DATA_DIR", str(data_dir))
        monkeypatch.delenv("SEARCH_GWAS_LOG", raising=False)

    @patch('search_gwas.cli.run_trait_query')
    def test_success(self, mock_run, capsys):
        mock_run.return_value = "Trait,Genes,PubMed ID\n"

        assert main(['trait', 'x', '-c']) == 0
        assert capsys.readouterr().out == "Trait,Genes,PubMed ID\n"

    @patch('search_gwas.cli.run_trait_query')
    def test_fetch_error_exit_code(self, mock_run, capsys):
        mock_run.side_effect = FetchError(FetchErrorKind.NETWORK, "Could not download", details="offline")

        assert main(['trait', 'x']) == 1
        err = capsys.readouterr().err
        assert "fetch error" in err
        assert "offline" in err

    @patch('search_gwas.cli.run_trait_query')
    def test_parse_error_exit_code(self, mock_run, capsys):
        mock_run.side_effect = ParseError(ParseErrorKind.MALFORMED_HEADER, "Catalog header does not match")

        assert main(['trait', 'x']) == 1
        assert "parse error" in capsys.readouterr().err

    def test_bad_config_exit_code(self, monkeypatch, capsys):
        monkeypatch.setenv("SEARCH_GWAS_TIMEOUT", "soon")

        assert main(['trait', 'x']) == 1
        assert "config error" in capsys.readouterr().err

    @pytest.mark.parametrize("timeout", ["0", "-5"])
    @patch('requests.get')
    def test_nonpositive_timeout_flag(self, mock_get, timeout, capsys):
        assert main(['--timeout', timeout, 'trait', 'x']) == 1

        err = capsys.readouterr().err
        assert "config error" in err
        assert "timeout must be positive" in err
        mock_get.assert_not_called()

    @patch('search_gwas.cli.run_update')
    def test_update(self, mock_update, capsys):
        mock_update.return_value.stale = False

        assert main(['update', '-f']) == 0
        assert mock_update.call_args[1]["force"] == 1
        assert "Up to date!" in capsys.readouterr().out
