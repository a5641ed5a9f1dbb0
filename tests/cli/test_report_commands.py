"""Dashboard, monetization and analytics commands over the demo data."""


def test_dashboard_all_sections(invoke, seeded):
    result = invoke("dashboard")

    assert result.exit_code == 0
    assert "Top Faixas" in result.stdout
    assert "Nita Famba" in result.stdout
    assert "Lizha James" in result.stdout


def test_dashboard_single_section(invoke, seeded):
    result = invoke("dashboard", "top-tracks")

    assert result.exit_code == 0
    assert "Top Faixas" in result.stdout
    assert "Atividade" not in result.stdout


def test_dashboard_on_empty_database(invoke):
    result = invoke("dashboard", "activity")

    assert result.exit_code == 0
    assert "Nenhuma atividade recente" in result.stdout


def test_monetization_summary(invoke, seeded):
    result = invoke("monetization")

    assert result.exit_code == 0
    assert "Premium" in result.stdout
    assert "Receita concluída" in result.stdout
    assert "Receita líquida" in result.stdout
    assert "João Machava" in result.stdout


def test_analytics_period(invoke, seeded):
    result = invoke("analytics", "--period", "week", "--months", "3")

    assert result.exit_code == 0
    assert "Período: Semanal" in result.stdout
    assert "Novos Usuários" in result.stdout


def test_analytics_rejects_unknown_period(invoke):
    result = invoke("analytics", "--period", "decade")
    assert result.exit_code != 0
