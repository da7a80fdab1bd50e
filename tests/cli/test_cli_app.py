from unittest.mock import MagicMock, patch


class TestBuildServices:
    @patch("daflash.cli.app.get_number_allocator")
    @patch("daflash.cli.app.get_invoice_repository")
    @patch("daflash.cli.app.get_quote_repository")
    def test_returns_correct_types(self, mock_quote_repo, mock_invoice_repo, mock_allocator):
        from daflash.cli.app import _build_services
        from daflash.services.invoice_service import InvoiceService
        from daflash.services.quote_service import QuoteService

        quote_svc, invoice_svc = _build_services()
        assert isinstance(quote_svc, QuoteService)
        assert isinstance(invoice_svc, InvoiceService)
        assert invoice_svc.quote_repo is mock_quote_repo.return_value
        assert mock_allocator.call_count == 2


class TestMainMenu:
    @patch("daflash.cli.app._build_services")
    @patch("daflash.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from daflash.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("daflash.cli.app._build_services")
    @patch("daflash.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from daflash.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("daflash.cli.app._build_services")
    @patch("daflash.cli.app.questionary")
    @patch("daflash.cli.app.list_quotes_menu")
    def test_list_quotes(self, mock_list, mock_q, mock_build):
        from daflash.cli.app import main_menu

        quote_svc, invoice_svc = MagicMock(), MagicMock()
        mock_build.return_value = (quote_svc, invoice_svc)
        mock_q.select.return_value.ask.side_effect = ["List Quotes", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(quote_svc, invoice_svc)

    @patch("daflash.cli.app._build_services")
    @patch("daflash.cli.app.questionary")
    @patch("daflash.cli.app.list_invoices_menu")
    def test_list_invoices(self, mock_list, mock_q, mock_build):
        from daflash.cli.app import main_menu

        invoice_svc = MagicMock()
        mock_build.return_value = (MagicMock(), invoice_svc)
        mock_q.select.return_value.ask.side_effect = ["List Invoices", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(invoice_svc)

    @patch("daflash.cli.app._build_services")
    @patch("daflash.cli.app.questionary")
    @patch("daflash.cli.app.password_hash_menu")
    def test_password_hash(self, mock_hash, mock_q, mock_build):
        from daflash.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Generate Admin Password Hash", "Exit"]

        main_menu()
        mock_hash.assert_called_once()
