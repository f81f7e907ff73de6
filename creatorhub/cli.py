"""
CreatorHub CLI
DB 초기화 / 분석 / 진행률 조회 명령

Usage:
    creatorhub init-db --sample-data
    creatorhub analytics demo-user --start 2024-01-01 --end 2024-01-31
    creatorhub progress demo-user
"""

import json
import logging
from datetime import datetime, timedelta
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()

from creatorhub.core.config import settings
from creatorhub.core.exceptions import CreatorHubError
from creatorhub.models.analytics import AnalyticsPeriod
from creatorhub.services.storage import Store, SqlStore, get_store
from creatorhub.services.storage.seed import DEMO_USER_ID, seed_reference_data, seed_sample_data
from creatorhub.services.analytics import MetricsAggregator
from creatorhub.services.progress import ProgressProjector

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = typer.Typer(help="CreatorHub Analytics CLI")
console = Console()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]


def _open_store(database_url: Optional[str]) -> Store:
    if database_url:
        return SqlStore(database_url)
    return get_store()


@app.command("init-db")
def init_db(
    database_url: Optional[str] = typer.Option(
        None,
        "--database-url",
        help="DB URL (기본: 환경 설정)"
    ),
    niche: str = typer.Option("general", "--niche", help="로드맵 태스크 niche"),
    create_sample_data: bool = typer.Option(
        False,
        "--sample-data",
        help="데모 사용자 샘플 데이터 생성"
    )
):
    """
    DB 초기화

    - 테이블 생성
    - 로드맵 태스크 / 마일스톤
    - 샘플 데이터 (옵션)
    """
    console.print("\n[bold cyan]CreatorHub - Database Initialization[/bold cyan]\n")

    try:
        store = SqlStore(database_url)
        health = store.health_check()
        if health['status'] != 'healthy':
            console.print(f"[red]Database unhealthy: {health}[/red]")
            raise typer.Exit(1)

        counts = seed_reference_data(store, niche=niche)
        console.print(f"[green]Reference data: {counts['tasks']} tasks, {counts['milestones']} milestones[/green]")

        if create_sample_data:
            sample = seed_sample_data(store)
            summary = ", ".join(f"{value} {key}" for key, value in sample.items())
            console.print(f"[green]Sample data for '{DEMO_USER_ID}': {summary}[/green]")

        store.close()

    except CreatorHubError as e:
        console.print(f"\n[red]Initialization failed: {e.message}[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        "[bold green]Database Initialization Complete![/bold green]\n\n"
        "Next steps:\n"
        f"1. creatorhub analytics {DEMO_USER_ID}\n"
        f"2. creatorhub progress {DEMO_USER_ID}\n"
        "3. uvicorn creatorhub.main:app",
        title="Success",
        border_style="green"
    ))


@app.command()
def analytics(
    user_id: str = typer.Argument(..., help="사용자 ID"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=DATE_FORMATS, help="기간 시작"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS, help="기간 종료"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="DB URL"),
    as_json: bool = typer.Option(False, "--json", help="스냅샷 JSON 출력")
):
    """분석 스냅샷 계산 및 저장"""
    end = end or datetime.now()
    start = start or end - timedelta(days=29)

    try:
        store = _open_store(database_url)
        snapshot = MetricsAggregator(store).compute_analytics(
            user_id,
            AnalyticsPeriod(start=start, end=end)
        )
    except CreatorHubError as e:
        console.print(f"[red]{type(e).__name__}: {e.message}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(snapshot.model_dump(mode="json")))
        return

    console.print(f"\n[bold cyan]Analytics: {user_id}[/bold cyan] ({start.date()} ~ {end.date()})\n")

    table = Table(title="Overview")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Published content", str(snapshot.metrics.published_content))
    table.add_row("Posts per week", f"{snapshot.metrics.publishing_frequency:.2f}")
    table.add_row("Quality score", f"{snapshot.metrics.content_quality_score:.1f}")
    table.add_row("Total audience", f"{snapshot.audience_metrics.total_audience:,}")
    table.add_row("Engagement rate", f"{snapshot.engagement_metrics.engagement_rate:.2f}%")
    table.add_row("Growth velocity", f"{snapshot.growth_metrics.growth_velocity:.2f}%")
    console.print(table)

    if snapshot.recommendations:
        recs = Table(title="Recommendations")
        recs.add_column("Priority", justify="right")
        recs.add_column("Title")
        recs.add_column("Impact")
        for rec in sorted(snapshot.recommendations, key=lambda r: r.priority, reverse=True):
            recs.add_row(str(rec.priority), rec.title, rec.impact)
        console.print(recs)

    console.print(f"\n[dim]Snapshot: {snapshot.id}[/dim]")


@app.command()
def progress(
    user_id: str = typer.Argument(..., help="사용자 ID"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="DB URL")
):
    """로드맵 진행률 조회"""
    try:
        store = _open_store(database_url)
        result = ProgressProjector(store).compute_progress(user_id)
    except CreatorHubError as e:
        console.print(f"[red]{type(e).__name__}: {e.message}[/red]")
        raise typer.Exit(1)

    overview = result.overview
    predictions = result.predictions

    table = Table(title=f"Progress: {user_id}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Tasks completed", str(overview.total_tasks_completed))
    table.add_row("Completion rate", f"{overview.completion_rate:.1f}%")
    table.add_row("Current streak", str(overview.current_streak))
    table.add_row("Longest streak", str(overview.longest_streak))
    table.add_row("Pace", predictions.current_pace.value)
    completion = predictions.estimated_completion_date
    table.add_row("Estimated completion", completion.date().isoformat() if completion else "-")
    console.print(table)


if __name__ == "__main__":
    app()
