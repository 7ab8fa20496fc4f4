"""Tests for the Streamlit app module."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from fincommand.adapters.interface.streamlit import app
from fincommand.application.services import CommandResult, QuickCountService
from fincommand.domain.errors import AuthError
from fincommand.domain.models import (
    CompanyOverview,
    CreditCard,
    LedgerTotals,
    Transaction,
    TransactionType,
)
from fincommand.domain.services.quick_count import add_obligation, default_snapshot
from fincommand.domain.services.settings import DEFAULT_COMPANY


class _Block:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class _FakeStreamlit:
    def __init__(self) -> None:
        self.session_state: dict = {}
        self.config_kwargs = None
        self.titles: list[str] = []
        self.tab_labels = None
        self.forms: list[str] = []
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.rerun_called = False

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.titles.append(text)

    def tabs(self, labels):
        self.tab_labels = labels
        return [_Block() for _ in labels]

    def form(self, key, **_kwargs):
        self.forms.append(key)
        return _Block()

    def text_input(self, label, **_kwargs):
        return ""

    def form_submit_button(self, label):
        return False

    def error(self, text: str):
        self.errors.append(text)

    def success(self, text: str):
        self.successes.append(text)

    def rerun(self):
        self.rerun_called = True


def _transaction() -> Transaction:
    return Transaction(
        id="t1",
        date=date(2024, 3, 15),
        month="Marzo",
        year=2024,
        category="Ventas",
        description="Factura 12",
        amount_local=Decimal("1500.25"),
        amount_foreign=Decimal("25"),
        payment_method="Transferencia",
        company_id="c1",
        type=TransactionType.INCOME,
    )


def test_format_money_uses_separators():
    assert app._format_money(Decimal("1234567.5")) == "RD$ 1,234,567.50"
    assert app._format_money(Decimal("3"), "US$") == "US$ 3.00"


def test_transaction_rows_use_spanish_headers():
    rows = app._transaction_rows([_transaction()])

    assert rows == [
        {
            "Fecha": "2024-03-15",
            "Mes": "Marzo",
            "Categoría": "Ventas",
            "Concepto": "Factura 12",
            "Monto RD": 1500.25,
            "Monto US": 25.0,
            "Método": "Transferencia",
        }
    ]


def test_overview_rows_include_net_amounts():
    overview = [
        CompanyOverview(
            company=replace(DEFAULT_COMPANY, id="c1", name="Norte"),
            totals=LedgerTotals(
                income_local=Decimal("100"),
                expense_local=Decimal("30"),
                income_foreign=Decimal("2"),
            ),
        )
    ]

    (row,) = app._overview_rows(overview)

    assert row["Empresa"] == "Norte"
    assert row["Neto RD"] == 70.0
    assert row["Neto US"] == 2.0


def test_apply_card_form_rederives_due_date_on_issuer_change():
    base = CreditCard(
        id="card-1",
        issuer="Banco Popular",
        label="Visa",
        cutoff_date=date(2024, 1, 10),
        due_date=date(2024, 1, 30),
    )
    values = {
        "issuer": "BHD",
        "label": "Oro",
        "cutoff_date": date(2024, 1, 10),
        "due_date": date(2024, 1, 28),
        "debt_local": Decimal("900"),
        "debt_foreign": Decimal("0"),
        "debt_label_local": "Consumo",
        "debt_label_foreign": "Publicidad",
    }

    form = app._apply_card_form(base, values)

    assert form.label == "Oro"
    assert form.debt_local == Decimal("900")
    assert form.due_date == date(2024, 2, 4)


def test_apply_card_form_keeps_manual_due_date():
    base = CreditCard(
        id="card-1",
        issuer="Banco Popular",
        label="Visa",
        cutoff_date=date(2024, 1, 10),
        due_date=date(2024, 1, 30),
    )
    values = {
        "issuer": "Banco Popular",
        "label": "Visa",
        "cutoff_date": date(2024, 1, 10),
        "due_date": date(2024, 2, 2),
        "debt_local": Decimal("0"),
        "debt_foreign": Decimal("0"),
        "debt_label_local": "Consumo",
        "debt_label_foreign": "Consumo",
    }

    assert app._apply_card_form(base, values).due_date == date(2024, 2, 2)


def test_notify_reports_failures_and_messages(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    app._notify(CommandResult.failure("No se pudo guardar la transacción."))
    app._notify(CommandResult.success("Cambios guardados."))
    app._notify(CommandResult.success())

    assert fake_st.errors == ["No se pudo guardar la transacción."]
    assert fake_st.successes == ["Cambios guardados."]


def test_authenticate_stores_session_and_reruns(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    session = SimpleNamespace(user_id="u1", email="ana@example.com")

    app._authenticate(lambda email, password: session, "ana@example.com", "x")

    assert fake_st.session_state["session"] is session
    assert fake_st.rerun_called


def test_authenticate_shows_auth_errors(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    def _reject(email, password):
        raise AuthError("Correo o contraseña incorrectos.")

    app._authenticate(_reject, "ana@example.com", "bad")

    assert fake_st.errors == ["Correo o contraseña incorrectos."]
    assert "session" not in fake_st.session_state
    assert not fake_st.rerun_called


def test_main_renders_auth_without_session(monkeypatch):
    """main should stop at the sign in screen when nobody is signed in."""
    fake_st = _FakeStreamlit()
    context = SimpleNamespace(auth=SimpleNamespace())
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_get_context", lambda: context)

    app.main()

    assert fake_st.config_kwargs["layout"] == "wide"
    assert fake_st.titles == ["FinCommand"]
    assert fake_st.tab_labels == ["Iniciar sesión", "Registrarse"]
    assert fake_st.forms == ["sign_in", "sign_up"]


def test_edit_obligation_updates_concept_and_amount():
    snapshot = add_obligation(default_snapshot(), "Agua", "100")
    (item,) = snapshot.weekly_obligations

    edited = app._edit_obligation(snapshot, item, "Agua y luz", Decimal("180"))

    (updated,) = edited.weekly_obligations
    assert updated.id == item.id
    assert updated.concept == "Agua y luz"
    assert updated.amount == Decimal("180")


def test_edit_obligation_ignores_unchanged_or_blank_concept():
    snapshot = add_obligation(default_snapshot(), "Agua", "100")
    (item,) = snapshot.weekly_obligations

    assert app._edit_obligation(snapshot, item, "Agua", Decimal("100")) is None
    assert app._edit_obligation(snapshot, item, "  ", Decimal("100")) is None
    blank = app._edit_obligation(snapshot, item, "", Decimal("90"))
    assert blank.weekly_obligations[0].concept == "Agua"


def test_save_and_rerun_persists_edited_obligation(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    repository = MagicMock()
    repository.upsert_snapshot.return_value = "qc-1"
    quick_count = QuickCountService(repository, "owner-1", logger=MagicMock())
    snapshot = add_obligation(quick_count.snapshot, "Agua", "100")
    (item,) = snapshot.weekly_obligations

    app._save_and_rerun(
        quick_count,
        app._edit_obligation(snapshot, item, "Agua", Decimal("120")),
    )

    (_, saved), _ = repository.replace_weekly_obligations.call_args
    assert saved[0].amount == Decimal("120")
    assert quick_count.snapshot.weekly_obligations[0].amount == Decimal("120")
    assert fake_st.successes == ["Cambios guardados."]
    assert fake_st.rerun_called
