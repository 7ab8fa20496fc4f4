"""Streamlit interface entry point."""

import atexit
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from decimal import Decimal

import streamlit as st

from fincommand.adapters.interface.streamlit.charts import build_monthly_chart
from fincommand.application.context import AppContext
from fincommand.application.ports.auth import AuthSession
from fincommand.application.services import (
    CommandResult,
    CreditCardService,
    LedgerService,
    QuickCountService,
    SettingsService,
    SubscriptionService,
    WorkService,
)
from fincommand.application.use_cases.export_transactions import (
    ExportTransactionsUseCase,
)
from fincommand.application.use_cases.import_transactions import (
    ImportTransactionsUseCase,
)
from fincommand.domain.constants import (
    BALANCE_SOURCES,
    DEFAULT_APP_NAME,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    MONTH_NAMES,
)
from fincommand.domain.errors import AuthError, RecordStoreError
from fincommand.domain.models import (
    AppSettingsPatch,
    CashPositionSnapshot,
    CompanyOverview,
    CompanyPatch,
    CreditCard,
    Currency,
    OverviewPeriod,
    SubscriptionCategory,
    Transaction,
    TransactionPatch,
    TransactionType,
    WeeklyObligation,
)
from fincommand.domain.models.tabular import EXPORT_FILE_NAME
from fincommand.domain.services.credit_cards import (
    change_form_field,
    new_card_form,
)
from fincommand.domain.services.currency import convert_local_to_foreign
from fincommand.domain.services.ledger import (
    compute_company_overview,
    compute_ledger_totals,
    filter_by_period,
    month_name,
)
from fincommand.domain.services.patches import or_cleared
from fincommand.domain.services.quick_count import (
    add_obligation,
    remove_obligation,
    set_balance,
    set_days_remaining,
    toggle_obligation_paid,
    toggle_settlement_mode,
    update_obligation,
)
from fincommand.domain.services.subscriptions import (
    describe_linked_card,
    totals_by_category,
)
from fincommand.domain.services.work import ALL_CLIENTS, is_late
from fincommand.infrastructure.container import (
    build_app_context,
    build_credit_card_service,
    build_database_adapter,
    build_ledger_service,
    build_quick_count_service,
    build_settings_service,
    build_subscription_service,
    build_work_service,
)

PAGES = (
    "Dashboard",
    "Tarjetas",
    "Suscripciones",
    "Conteo Rápido",
    "Resumen General",
    "Trabajo",
    "Ajustes",
)
SECTION_LABELS = {
    TransactionType.INCOME: "Ingresos",
    TransactionType.EXPENSE: "Gastos",
}
PERIOD_LABELS = {
    OverviewPeriod.WEEK: "Semana",
    OverviewPeriod.MONTH: "Mes",
    OverviewPeriod.YEAR: "Año",
    OverviewPeriod.ALL: "Todo",
}
TASK_STATUS_LABELS = {
    "pending": "Pendiente",
    "completed": "Completada",
    "confirmed": "Confirmada",
}
THEMES = ("green", "black", "red")
XLSX_MIME = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)


@dataclass
class OwnerServices:
    """Services bound to the signed-in owner."""

    ledger: LedgerService
    cards: CreditCardService
    subscriptions: SubscriptionService
    quick_count: QuickCountService
    work: WorkService
    settings: SettingsService


@st.cache_resource(show_spinner=False)
def _load_database_adapter():
    """Build the process-wide database adapter, disposed at exit."""
    adapter = build_database_adapter()
    atexit.register(adapter.dispose)
    return adapter


def _get_context() -> AppContext:
    """Return the context of the current browser session."""
    if "context" not in st.session_state:
        st.session_state["context"] = build_app_context(
            db_port=_load_database_adapter()
        )
    return st.session_state["context"]


def _build_services(
    context: AppContext,
    owner_id: str,
) -> tuple[OwnerServices, list[str]]:
    """Build and load every service of an owner.

    Returns:
        Services plus the failure notices raised while loading.
    """
    services = OwnerServices(
        ledger=build_ledger_service(context, owner_id),
        cards=build_credit_card_service(context, owner_id),
        subscriptions=build_subscription_service(context, owner_id),
        quick_count=build_quick_count_service(context, owner_id),
        work=build_work_service(context, owner_id),
        settings=build_settings_service(context, owner_id),
    )
    notices = []
    for service in (
        services.ledger,
        services.cards,
        services.subscriptions,
        services.quick_count,
        services.work,
        services.settings,
    ):
        result = service.load()
        if not result.ok:
            notices.append(result.message)
    return services, notices


def _get_services(context: AppContext, session: AuthSession) -> OwnerServices:
    services = st.session_state.get("services")
    if services is None or st.session_state.get("services_owner") != session.user_id:
        services, notices = _build_services(context, session.user_id)
        st.session_state["services"] = services
        st.session_state["services_owner"] = session.user_id
        for notice in notices:
            st.error(notice)
    return services


def _format_money(value: Decimal, symbol: str = "RD$") -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{symbol} {value:,.2f}"


def _notify(result: CommandResult) -> None:
    """Show a command outcome to the user."""
    if not result.ok:
        st.error(result.message)
    elif result.message:
        st.success(result.message)


def _transaction_label(transaction: Transaction) -> str:
    return (
        f"{transaction.date.isoformat()} · {transaction.description} · "
        f"{_format_money(transaction.amount_local)}"
    )


def _transaction_rows(transactions: Sequence[Transaction]) -> list[dict]:
    """Return table rows for the ledger listing."""
    return [
        {
            "Fecha": t.date.isoformat(),
            "Mes": t.month,
            "Categoría": t.category,
            "Concepto": t.description,
            "Monto RD": float(t.amount_local),
            "Monto US": float(t.amount_foreign),
            "Método": t.payment_method,
        }
        for t in transactions
    ]


def _apply_card_form(base: CreditCard, values: dict) -> CreditCard:
    """Apply submitted edit-form values in the order a user would type them.

    A manual due date is applied first so that a change of issuer or cutoff
    date in the same submission re-derives it.
    """
    form = base
    for field in (
        "label",
        "debt_local",
        "debt_foreign",
        "debt_label_local",
        "debt_label_foreign",
    ):
        form = change_form_field(form, field, values[field])
    if values.get("due_date") and values["due_date"] != base.due_date:
        form = change_form_field(form, "due_date", values["due_date"])
    if values["issuer"] != base.issuer:
        form = change_form_field(form, "issuer", values["issuer"])
    if values.get("cutoff_date") != base.cutoff_date:
        form = change_form_field(form, "cutoff_date", values.get("cutoff_date"))
    return form


def _overview_rows(overview: Sequence[CompanyOverview]) -> list[dict]:
    return [
        {
            "Empresa": item.company.name,
            "Ingresos RD": float(item.totals.income_local),
            "Gastos RD": float(item.totals.expense_local),
            "Neto RD": float(item.totals.net_local),
            "Ingresos US": float(item.totals.income_foreign),
            "Gastos US": float(item.totals.expense_foreign),
            "Neto US": float(item.totals.net_foreign),
        }
        for item in overview
    ]


def _obligation_label(item: WeeklyObligation) -> str:
    state = "Pagado" if item.is_paid else "Pendiente"
    return (
        f"{item.concept} · {_format_money(item.amount)} · "
        f"{item.settlement_mode.value} · {state}"
    )


def _render_auth(context: AppContext) -> None:
    """Render sign in and sign up forms."""
    st.title(DEFAULT_APP_NAME)
    sign_in_tab, sign_up_tab = st.tabs(["Iniciar sesión", "Registrarse"])
    with sign_in_tab:
        with st.form("sign_in"):
            email = st.text_input("Correo")
            password = st.text_input("Contraseña", type="password")
            submitted = st.form_submit_button("Entrar")
        if submitted:
            _authenticate(context.auth.sign_in, email, password)
    with sign_up_tab:
        with st.form("sign_up"):
            email = st.text_input("Correo", key="sign_up_email")
            password = st.text_input(
                "Contraseña", type="password", key="sign_up_password"
            )
            submitted = st.form_submit_button("Crear cuenta")
        if submitted:
            _authenticate(context.auth.sign_up, email, password)


def _authenticate(action, email: str, password: str) -> None:
    try:
        session = action(email, password)
    except (AuthError, RecordStoreError) as exc:
        st.error(str(exc))
        return
    st.session_state["session"] = session
    st.rerun()


def _render_company_selector(services: OwnerServices):
    companies = services.ledger.companies
    selected = services.settings.selected_company(companies)
    if selected is None:
        return None
    names = [company.name for company in companies]
    index = next(
        (i for i, c in enumerate(companies) if c.id == selected.id), 0
    )
    choice = st.sidebar.selectbox("Empresa", names, index=index)
    company = companies[names.index(choice)]
    if company.id != services.settings.preferences.selected_company_id:
        services.settings.select_company(company.id)
    return company


def _render_dashboard(
    context: AppContext,
    services: OwnerServices,
    company,
    today: date,
) -> None:
    """Render totals, the monthly chart, entry form and ledger listing."""
    ledger = services.ledger
    if company is None:
        st.warning("No hay empresas disponibles.")
        return
    st.header(company.name)
    section_label = st.radio(
        "Sección",
        list(SECTION_LABELS.values()),
        horizontal=True,
    )
    section = next(
        key for key, value in SECTION_LABELS.items() if value == section_label
    )

    totals = ledger.totals(company.id)
    income_col, expense_col, net_col = st.columns(3)
    income_col.metric(
        "Ingresos",
        _format_money(totals.income_local),
        _format_money(totals.income_foreign, "US$"),
    )
    expense_col.metric(
        "Gastos",
        _format_money(totals.expense_local),
        _format_money(totals.expense_foreign, "US$"),
        delta_color="inverse",
    )
    net_col.metric(
        "Balance",
        _format_money(totals.net_local),
        _format_money(totals.net_foreign, "US$"),
    )
    st.subheader(f"Resumen mensual {today.year}")
    st.altair_chart(
        build_monthly_chart(ledger.monthly_series(company.id, today.year)),
        width="stretch",
    )

    _render_entry_form(services, company.id, section, today)
    _render_ledger_listing(services, company.id, section)
    _render_spreadsheet_tools(context, services, company.id, section)


def _render_entry_form(
    services: OwnerServices,
    company_id: str,
    section: TransactionType,
    today: date,
) -> None:
    categories = (
        INCOME_CATEGORIES
        if section is TransactionType.INCOME
        else EXPENSE_CATEGORIES
    )
    rate = services.quick_count.snapshot.exchange_rate
    with st.form(f"entry_{section.value}", clear_on_submit=True):
        st.subheader(f"Nuevo {section.label.lower()}")
        entry_date = st.date_input("Fecha", value=today)
        amount_local = st.number_input("Monto RD$", min_value=0.0, step=100.0)
        amount_foreign = st.number_input("Monto US$", min_value=0.0, step=10.0)
        convert = st.checkbox(f"Calcular US$ a tasa {rate}")
        description = st.text_input("Concepto")
        category = st.selectbox("Categoría", categories)
        payment_method = st.text_input("Método de pago", value="Efectivo")
        submitted = st.form_submit_button("Agregar")
    if submitted:
        local = Decimal(str(amount_local))
        foreign = Decimal(str(amount_foreign))
        if convert and foreign == 0:
            foreign = convert_local_to_foreign(local, rate)
        _notify(
            services.ledger.add_manual_transaction(
                entry_date=entry_date,
                section=section,
                company_id=company_id,
                amount_local=local,
                amount_foreign=foreign,
                description=description,
                category=category,
                payment_method=payment_method,
            )
        )


def _render_ledger_listing(
    services: OwnerServices,
    company_id: str,
    section: TransactionType,
) -> None:
    ledger = services.ledger
    transactions = ledger.visible_transactions(company_id, section)
    st.subheader(SECTION_LABELS[section])
    if not transactions:
        st.info("Sin registros.")
        return
    st.dataframe(
        _transaction_rows(transactions),
        width="stretch",
        hide_index=True,
    )
    labels = {_transaction_label(t): t.id for t in transactions}

    with st.expander("Editar registro"):
        choice = st.selectbox("Registro", list(labels), key=f"edit_{section.value}")
        current = next(t for t in transactions if t.id == labels[choice])
        with st.form(f"edit_form_{section.value}"):
            description = st.text_input("Concepto", value=current.description)
            amount_local = st.number_input(
                "Monto RD$", min_value=0.0, value=float(current.amount_local)
            )
            amount_foreign = st.number_input(
                "Monto US$", min_value=0.0, value=float(current.amount_foreign)
            )
            entry_date = st.date_input("Fecha", value=current.date)
            submitted = st.form_submit_button("Guardar cambios")
        if submitted:
            _notify(
                ledger.update_transaction(
                    current.id,
                    TransactionPatch(
                        description=description,
                        amount_local=Decimal(str(amount_local)),
                        amount_foreign=Decimal(str(amount_foreign)),
                        date=entry_date,
                        month=month_name(entry_date),
                        year=entry_date.year,
                    ),
                )
            )

    selected = st.multiselect(
        "Seleccionar para eliminar", list(labels), key=f"delete_{section.value}"
    )
    if selected and st.button(
        f"Eliminar {len(selected)} registros", key=f"bulk_{section.value}"
    ):
        _notify(ledger.delete_transactions([labels[label] for label in selected]))
        st.rerun()


def _render_spreadsheet_tools(
    context: AppContext,
    services: OwnerServices,
    company_id: str,
    section: TransactionType,
) -> None:
    export_col, import_col = st.columns(2)
    with export_col:
        payload = ExportTransactionsUseCase(
            context.codec, logger=context.logger
        ).execute(services.ledger.visible_transactions(None))
        st.download_button(
            "Exportar Excel",
            data=payload,
            file_name=EXPORT_FILE_NAME,
            mime=XLSX_MIME,
        )
    with import_col:
        uploaded = st.file_uploader("Importar Excel", type=["xlsx"])
        if uploaded is not None and st.button("Importar"):
            use_case = ImportTransactionsUseCase(
                context.codec, services.ledger, logger=context.logger
            )
            _notify(use_case.execute(uploaded.getvalue(), company_id, section))


def _render_cards(services: OwnerServices, today: date) -> None:
    """Render credit cards ordered by urgency."""
    cards = services.cards
    remaining = cards.total_remaining()
    local_col, foreign_col = st.columns(2)
    local_col.metric("Deuda pendiente RD$", _format_money(remaining.local))
    foreign_col.metric(
        "Deuda pendiente US$", _format_money(remaining.foreign, "US$")
    )

    for view in cards.views(today):
        card = view.card
        title = f"{card.issuer} - {card.label} · {view.urgency.label}"
        with st.expander(title):
            st.caption(
                f"Corte: {card.cutoff_date or '-'} · "
                f"Límite: {card.due_date or '-'} · "
                f"Días: {view.days_until_due} · Estado: {card.status.value}"
            )
            st.write(
                f"{card.debt_label_local}: {_format_money(card.debt_local)} · "
                f"Pagado {_format_money(card.paid_local)} · "
                f"Resta {_format_money(view.remaining.local)}"
            )
            st.write(
                f"{card.debt_label_foreign}: "
                f"{_format_money(card.debt_foreign, 'US$')} · "
                f"Pagado {_format_money(card.paid_foreign, 'US$')} · "
                f"Resta {_format_money(view.remaining.foreign, 'US$')}"
            )
            with st.form(f"pay_{card.id}", clear_on_submit=True):
                pay_local = st.number_input("Abono RD$", min_value=0.0)
                pay_foreign = st.number_input("Abono US$", min_value=0.0)
                if st.form_submit_button("Registrar pago"):
                    _notify(
                        cards.register_payment(
                            card.id,
                            Decimal(str(pay_local)),
                            Decimal(str(pay_foreign)),
                        )
                    )
            _render_card_form(cards, card, key=f"edit_{card.id}")
            if st.button("Eliminar tarjeta", key=f"delete_{card.id}"):
                _notify(cards.delete_card(card.id))
                st.rerun()

    st.subheader("Nueva tarjeta")
    _render_card_form(cards, new_card_form(), key="new_card")


def _render_card_form(cards: CreditCardService, base: CreditCard, key: str) -> None:
    with st.form(key):
        issuer = st.text_input("Banco", value=base.issuer)
        label = st.text_input("Nombre", value=base.label)
        cutoff_date = st.date_input("Fecha de corte", value=base.cutoff_date)
        due_date = st.date_input("Fecha límite", value=base.due_date)
        debt_local = st.number_input(
            "Deuda RD$", min_value=0.0, value=float(base.debt_local)
        )
        debt_label_local = st.text_input(
            "Tipo deuda RD$", value=base.debt_label_local
        )
        debt_foreign = st.number_input(
            "Deuda US$", min_value=0.0, value=float(base.debt_foreign)
        )
        debt_label_foreign = st.text_input(
            "Tipo deuda US$", value=base.debt_label_foreign
        )
        submitted = st.form_submit_button("Guardar tarjeta")
    if submitted:
        form = _apply_card_form(
            base,
            {
                "issuer": issuer,
                "label": label,
                "cutoff_date": cutoff_date,
                "due_date": due_date,
                "debt_local": Decimal(str(debt_local)),
                "debt_foreign": Decimal(str(debt_foreign)),
                "debt_label_local": debt_label_local,
                "debt_label_foreign": debt_label_foreign,
            },
        )
        _notify(cards.save_card(form))


def _render_subscriptions(services: OwnerServices) -> None:
    """Render subscription totals, creation form and list."""
    subscriptions = services.subscriptions
    rate = services.quick_count.snapshot.exchange_rate
    totals = subscriptions.totals(rate)
    local_col, foreign_col, total_col = st.columns(3)
    local_col.metric("Total RD$", _format_money(totals.total_local))
    foreign_col.metric("Total US$", _format_money(totals.total_foreign, "US$"))
    total_col.metric(
        "Total mensual (RD$)", _format_money(totals.total_normalized_local)
    )
    by_category = totals_by_category(subscriptions.subscriptions, rate)
    st.caption(
        " · ".join(
            f"{category.value}: {_format_money(amount)}"
            for category, amount in by_category.items()
        )
    )

    cards = services.cards.cards
    rows = [
        {
            "Nombre": sub.name,
            "Monto": float(sub.amount),
            "Moneda": sub.currency.value,
            "Día": sub.billing_day,
            "Tarjeta": describe_linked_card(cards, sub.card_id),
            "Categoría": sub.category.value,
        }
        for sub in subscriptions.subscriptions
    ]
    if rows:
        st.dataframe(rows, width="stretch", hide_index=True)
        names = {
            f"{sub.name} ({sub.currency.value} {sub.amount})": sub.id
            for sub in subscriptions.subscriptions
        }
        choice = st.selectbox("Eliminar suscripción", ["-", *names])
        if choice != "-" and st.button("Eliminar"):
            _notify(subscriptions.delete_subscription(names[choice]))
            st.rerun()

    card_labels = {
        describe_linked_card(cards, card.id): card.id for card in cards
    }
    with st.form("new_subscription", clear_on_submit=True):
        st.subheader("Nueva suscripción")
        name = st.text_input("Nombre")
        amount = st.number_input("Monto", min_value=0.0)
        currency = st.selectbox("Moneda", [c.value for c in Currency], index=1)
        billing_day = st.number_input(
            "Día de cobro", min_value=1, max_value=31, value=1
        )
        card_label = st.selectbox("Tarjeta", ["", *card_labels])
        category = st.selectbox(
            "Categoría", [c.value for c in SubscriptionCategory]
        )
        submitted = st.form_submit_button("Agregar")
    if submitted:
        _notify(
            subscriptions.add_subscription(
                name=name,
                amount=Decimal(str(amount)),
                card_id=card_labels.get(card_label, ""),
                currency=Currency(currency),
                billing_day=billing_day,
                category=SubscriptionCategory(category),
            )
        )


def _render_quick_count(services: OwnerServices) -> None:
    """Render balances, obligations and the daily target."""
    quick_count = services.quick_count
    current = quick_count.snapshot
    candidate = current
    balance_cols = st.columns(len(BALANCE_SOURCES))
    for column, source in zip(balance_cols, BALANCE_SOURCES):
        value = column.number_input(
            source,
            min_value=0.0,
            value=float(current.balances.get(source, 0)),
            key=f"balance_{source}",
        )
        candidate = set_balance(candidate, source, Decimal(str(value)))
    rate_col, ad_col, days_col = st.columns(3)
    rate = rate_col.number_input(
        "Tasa", min_value=0.0, value=float(current.exchange_rate)
    )
    ad_spend = ad_col.number_input(
        "Publicidad US$", min_value=0.0, value=float(current.ad_spend_foreign)
    )
    days = days_col.number_input(
        "Días", min_value=1, max_value=31, value=current.days_remaining
    )
    candidate = replace(
        set_days_remaining(candidate, days),
        exchange_rate=Decimal(str(rate)),
        ad_spend_foreign=Decimal(str(ad_spend)),
    )
    _notify(quick_count.save(candidate))

    st.subheader("Obligaciones de la semana")
    for item in quick_count.snapshot.weekly_obligations:
        label_col, paid_col, mode_col, remove_col = st.columns([4, 1, 1, 1])
        label_col.write(_obligation_label(item))
        if paid_col.button("Pagado", key=f"paid_{item.id}"):
            _save_and_rerun(
                quick_count, toggle_obligation_paid(quick_count.snapshot, item.id)
            )
        if mode_col.button("Modo", key=f"mode_{item.id}"):
            _save_and_rerun(
                quick_count, toggle_settlement_mode(quick_count.snapshot, item.id)
            )
        if remove_col.button("Quitar", key=f"remove_{item.id}"):
            _save_and_rerun(
                quick_count, remove_obligation(quick_count.snapshot, item.id)
            )
        with st.expander("Editar", expanded=False), st.form(f"edit_{item.id}"):
            concept = st.text_input(
                "Concepto", value=item.concept, key=f"concept_{item.id}"
            )
            amount = st.number_input(
                "Monto RD$",
                min_value=0.0,
                value=float(item.amount),
                key=f"amount_{item.id}",
            )
            if st.form_submit_button("Guardar"):
                edited = _edit_obligation(
                    quick_count.snapshot, item, concept, Decimal(str(amount))
                )
                if edited is not None:
                    _save_and_rerun(quick_count, edited)
    with st.form("new_obligation", clear_on_submit=True):
        concept = st.text_input("Concepto", key="new_obligation_concept")
        amount = st.number_input(
            "Monto RD$", min_value=0.0, key="new_obligation_amount"
        )
        if st.form_submit_button("Agregar obligación"):
            _save_and_rerun(
                quick_count,
                add_obligation(
                    quick_count.snapshot, concept, Decimal(str(amount))
                ),
            )

    plan = quick_count.plan()
    available_col, obligations_col, shortfall_col, target_col = st.columns(4)
    available_col.metric("Disponible", _format_money(plan.total_available))
    obligations_col.metric("Obligaciones", _format_money(plan.total_obligations))
    shortfall_col.metric("Faltante", _format_money(plan.shortfall))
    target_col.metric("Meta diaria", _format_money(plan.daily_target))
    st.caption(f"Publicidad en RD$: {_format_money(plan.ad_spend_local)}")


def _edit_obligation(
    snapshot: CashPositionSnapshot,
    item: WeeklyObligation,
    concept: str,
    amount: Decimal,
) -> CashPositionSnapshot | None:
    """Return the snapshot with the edited obligation, or None if unchanged.

    A blank concept keeps the stored one.
    """
    concept = concept.strip() or item.concept
    if concept == item.concept and amount == item.amount:
        return None
    return update_obligation(snapshot, item.id, concept=concept, amount=amount)


def _save_and_rerun(quick_count: QuickCountService, candidate) -> None:
    _notify(quick_count.save(candidate))
    st.rerun()


def _render_overview(services: OwnerServices, today: date) -> None:
    """Render per-company totals for the selected period."""
    period_label = st.radio(
        "Periodo", list(PERIOD_LABELS.values()), horizontal=True
    )
    period = next(
        key for key, value in PERIOD_LABELS.items() if value == period_label
    )
    year = today.year
    month = today.month
    if period in (OverviewPeriod.MONTH, OverviewPeriod.YEAR):
        years = sorted(
            {t.year for t in services.ledger.transactions} | {today.year},
            reverse=True,
        )
        year = st.selectbox("Año", years)
    if period is OverviewPeriod.MONTH:
        month = MONTH_NAMES.index(
            st.selectbox("Mes", MONTH_NAMES, index=today.month - 1)
        ) + 1
    filtered = filter_by_period(
        services.ledger.transactions, period, today, year=year, month=month
    )
    overview = compute_company_overview(services.ledger.companies, filtered)
    grand = compute_ledger_totals(filtered)
    income_col, expense_col, net_col = st.columns(3)
    income_col.metric("Ingresos", _format_money(grand.income_local))
    expense_col.metric("Gastos", _format_money(grand.expense_local))
    net_col.metric("Neto", _format_money(grand.net_local))
    st.dataframe(_overview_rows(overview), width="stretch", hide_index=True)


def _render_work(services: OwnerServices, now: datetime) -> None:
    """Render clients and the task agenda."""
    work = services.work
    counts = work.pending_counts()
    names = {client.name: client.id for client in work.clients}
    options = ["Todos", *names]
    choice = st.selectbox("Cliente", options)
    client_id = names.get(choice, ALL_CLIENTS)
    if client_id != ALL_CLIENTS:
        st.caption(f"Pendientes: {counts.get(client_id, 0)}")
        if st.button("Eliminar cliente"):
            _notify(work.delete_client(client_id))
            st.rerun()

    for task in work.agenda(client_id):
        client_name = next(
            (c.name for c in work.clients if c.id == task.client_id), "-"
        )
        late = " · Atrasada" if is_late(task, now) else ""
        text_col, button_col = st.columns([5, 1])
        text_col.write(
            f"{task.due_at:%Y-%m-%d %H:%M} · {client_name} · "
            f"{task.description} · {TASK_STATUS_LABELS[task.status.value]}{late}"
        )
        if button_col.button("Estado", key=f"status_{task.id}"):
            _notify(work.cycle_task_status(task.id))
            st.rerun()

    client_col, task_col = st.columns(2)
    with client_col, st.form("new_client", clear_on_submit=True):
        st.subheader("Nuevo cliente")
        name = st.text_input("Nombre")
        contact = st.text_input("Contacto")
        if st.form_submit_button("Agregar cliente"):
            _notify(work.add_client(name, contact))
    with task_col, st.form("new_task", clear_on_submit=True):
        st.subheader("Nueva tarea")
        task_client = st.selectbox("Cliente", list(names), key="task_client")
        description = st.text_input("Descripción")
        due_day = st.date_input("Fecha", value=now.date())
        due_time = st.time_input("Hora", value=time(9, 0))
        if st.form_submit_button("Agregar tarea") and task_client:
            _notify(
                work.add_task(
                    names[task_client],
                    description,
                    datetime.combine(due_day, due_time),
                )
            )


def _render_settings(services: OwnerServices, company) -> None:
    """Render branding, company and preference settings."""
    settings = services.settings
    with st.form("app_settings"):
        st.subheader("Aplicación")
        app_name = st.text_input("Nombre", value=settings.app_settings.app_name)
        app_logo = st.text_input(
            "Logo (URL)", value=settings.app_settings.app_logo or ""
        )
        if st.form_submit_button("Guardar"):
            _notify(
                settings.update_app_settings(
                    AppSettingsPatch(
                        app_name=app_name,
                        app_logo=or_cleared(app_logo or None),
                    )
                )
            )

    if company is not None:
        with st.form("company_settings"):
            st.subheader("Empresa")
            name = st.text_input("Nombre de la empresa", value=company.name)
            logo = st.text_input("Logo de la empresa", value=company.logo or "")
            theme = st.selectbox(
                "Tema",
                THEMES,
                index=THEMES.index(company.theme) if company.theme in THEMES else 0,
            )
            primary = st.color_picker("Color primario", value=company.primary_color)
            secondary = st.color_picker(
                "Color secundario", value=company.secondary_color
            )
            if st.form_submit_button("Guardar empresa"):
                _notify(
                    services.ledger.update_company(
                        company.id,
                        CompanyPatch(
                            name=name,
                            logo=or_cleared(logo or None),
                            theme=theme,
                            primary_color=primary,
                            secondary_color=secondary,
                        ),
                    )
                )
    with st.form("new_company", clear_on_submit=True):
        new_name = st.text_input("Nueva empresa")
        if st.form_submit_button("Crear empresa"):
            _notify(services.ledger.add_company(new_name))

    theme_label = "Modo claro" if settings.preferences.is_dark else "Modo oscuro"
    if st.button(theme_label):
        settings.toggle_theme()
        st.rerun()


def _sign_out(context: AppContext) -> None:
    context.auth.sign_out()
    for key in ("session", "services", "services_owner"):
        st.session_state.pop(key, None)
    st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title=DEFAULT_APP_NAME, layout="wide")
    context = _get_context()
    session = st.session_state.get("session")
    if session is None:
        _render_auth(context)
        return

    services = _get_services(context, session)
    st.title(services.settings.app_settings.app_name)
    page = st.sidebar.radio("Sección", PAGES)
    company = _render_company_selector(services)
    st.sidebar.caption(session.email)
    if st.sidebar.button("Cerrar sesión"):
        _sign_out(context)

    today = date.today()
    if page == "Dashboard":
        _render_dashboard(context, services, company, today)
    elif page == "Tarjetas":
        _render_cards(services, today)
    elif page == "Suscripciones":
        _render_subscriptions(services)
    elif page == "Conteo Rápido":
        _render_quick_count(services)
    elif page == "Resumen General":
        _render_overview(services, today)
    elif page == "Trabajo":
        _render_work(services, datetime.now())
    else:
        _render_settings(services, company)


if __name__ == "__main__":  # pragma: no cover
    main()
