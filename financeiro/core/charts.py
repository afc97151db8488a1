# financeiro/core/charts.py
import io
from typing import List, Union

import matplotlib
matplotlib.use('Agg')  # sem display: as imagens são servidas pelo Flask
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

from financeiro.core.models import ExpenseRecord, Totals

COLORS = {
    'Receitas': '#3B82F6',
    'Despesas': '#EF4444',
    'Fatias': ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884D8'],
}


def _to_png(fig) -> io.BytesIO:
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=120)
    buf.seek(0)
    plt.close(fig)
    return buf


def generate_balance_chart(totals: Totals) -> Union[io.BytesIO, None]:
    """Gera o gráfico de barras do balanço mensal (receitas vs. despesas)."""
    if not totals.total_income and not totals.total_expenses:
        return None

    summary = pd.DataFrame(
        {'Receitas': [totals.total_income], 'Despesas': [totals.total_expenses]},
        index=['Balanço'],
    )

    fig, ax = plt.subplots(figsize=(6, 4.5))
    summary.plot(kind='bar', ax=ax, color=[COLORS['Receitas'], COLORS['Despesas']], rot=0)

    ax.set_title('Balanço Mensal', fontsize=14, fontweight='bold')
    ax.set_ylabel('Valor (R$)')
    ax.grid(axis='y', linestyle='--', alpha=0.7)
    ax.yaxis.set_major_formatter(mticker.FormatStrFormatter('R$%.2f'))

    for container in ax.containers:
        ax.bar_label(container, fmt='R$%.2f', fontsize=8, padding=3)

    fig.tight_layout()
    return _to_png(fig)


def generate_expense_distribution_chart(expenses: List[ExpenseRecord]) -> Union[io.BytesIO, None]:
    """Gera o gráfico de pizza da distribuição das despesas do mês, por descrição."""
    df = pd.DataFrame([{'description': e.description, 'value': e.value} for e in expenses])
    if df.empty:
        return None

    by_description = df.groupby('description')['value'].sum().sort_values(ascending=False)
    by_description = by_description[by_description > 0]
    if by_description.empty:
        return None

    colors = [COLORS['Fatias'][i % len(COLORS['Fatias'])] for i in range(len(by_description))]

    fig, ax = plt.subplots(figsize=(6, 4.5))
    wedges, _ = ax.pie(by_description.values, colors=colors, startangle=90)
    ax.axis('equal')
    ax.set_title('Distribuição de Despesas', fontsize=14, fontweight='bold')

    labels = [f"{name}: R${value:.2f}" for name, value in by_description.items()]
    ax.legend(wedges, labels, loc='center left', bbox_to_anchor=(1, 0, 0.5, 1))

    fig.tight_layout()
    return _to_png(fig)
