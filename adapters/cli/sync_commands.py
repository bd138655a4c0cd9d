"""
MHD 동기화 CLI 명령어

MhdSyncUseCase를 CLI 명령으로 노출하는 어댑터입니다.
"""

import asyncio
from datetime import date, datetime
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from core.domain.date_token import DateTokenCodec
from core.domain.entities import ProductSyncReport, SyncOutcome
from adapters.db.database import initialize_database
from adapters.factory import AdapterFactory
from config.adapters import get_config

# CLI 앱 생성
app = typer.Typer(name="sync", help="MHD 동기화 명령어")
console = Console()

OUTCOME_STYLES = {
    SyncOutcome.UPDATED: "green",
    SyncOutcome.SKIPPED: "yellow",
    SyncOutcome.ERROR: "red",
}


def _to_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value else None


def _print_report(report: ProductSyncReport) -> None:
    style = OUTCOME_STYLES[report.outcome]
    console.print(f"상품: {report.product_number or report.product_id}")
    console.print(f"토큰: {report.token or '-'}")
    console.print(f"상태: {report.state.value}")
    console.print(f"결과: [{style}]{report.outcome.value}[/{style}]")

    if not report.updates:
        return

    table = Table(title="번역 업데이트")
    table.add_column("언어", style="cyan")
    table.add_column("제목", style="green")
    table.add_column("설명 변경", style="blue")
    table.add_column("커스텀 필드", style="magenta")

    for update in report.updates:
        table.add_row(
            update.language_id,
            update.title if update.title is not None else "-",
            "예" if update.description is not None else "-",
            ", ".join(sorted(update.custom_fields)) if update.custom_fields is not None else "-",
        )

    console.print(table)


@app.command("all")
def sync_all(
    batch_size: Optional[int] = typer.Option(None, "--batch-size", "-b", help="배치 크기 (기본값: 설정값)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="저장하지 않고 결과만 표시"),
    force: bool = typer.Option(False, "--force", help="변경이 없어도 다시 저장"),
    today: Optional[datetime] = typer.Option(None, "--today", formats=["%Y-%m-%d"], help="기준일 (YYYY-MM-DD)"),
):
    """제조사 번호가 있는 모든 상품의 MHD 필드를 동기화합니다."""

    async def _sync_all():
        try:
            # 설정 및 데이터베이스 초기화
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)
            size = batch_size or config.get_sync_batch_size()

            if dry_run:
                console.print("[yellow]드라이런 모드: 변경 사항을 저장하지 않습니다.[/yellow]")

            async with db_adapter.get_session() as session:
                usecase = factory.create_mhd_sync_usecase(session, today=_to_date(today))
                total = await usecase.product_repository.count_with_token()

                with Progress(
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    MofNCompleteColumn(),
                    console=console,
                ) as progress:
                    task = progress.add_task("MHD 동기화", total=total)
                    stats = await usecase.sync_all(
                        batch_size=size,
                        dry_run=dry_run,
                        force=force,
                        progress=lambda report: progress.advance(task),
                    )

            table = Table(title="MHD 동기화 결과")
            table.add_column("항목", style="cyan")
            table.add_column("값", style="green")
            table.add_row("처리", str(stats.total))
            table.add_row("업데이트", str(stats.updated))
            table.add_row("건너뜀", str(stats.skipped))
            table.add_row("오류", str(stats.errors))
            table.add_row("드라이런", "예" if stats.dry_run else "아니오")
            console.print(table)

            await db_adapter.close()

            if stats.errors:
                console.print(f"[red]{stats.errors}개 상품에서 오류가 발생했습니다.[/red]")
            else:
                console.print("[green]✓ MHD 동기화가 완료되었습니다![/green]")

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_sync_all())


@app.command("product")
def sync_product(
    product_id: str = typer.Argument(..., help="상품 ID"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="새 제조사 번호 (DDMMYY)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="저장하지 않고 결과만 표시"),
    today: Optional[datetime] = typer.Option(None, "--today", formats=["%Y-%m-%d"], help="기준일 (YYYY-MM-DD)"),
):
    """상품 한 건의 MHD 필드를 동기화합니다."""

    async def _sync_product():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)

            async with db_adapter.get_session() as session:
                usecase = factory.create_mhd_sync_usecase(session, today=_to_date(today))
                report = await usecase.sync_product(product_id, token=token, dry_run=dry_run)

            _print_report(report)
            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_sync_product())


@app.command("stock-movement")
def stock_movement(
    product_id: str = typer.Argument(..., help="상품 ID"),
    comment: str = typer.Argument(..., help="재고 이동 코멘트"),
):
    """재고 이동 코멘트의 날짜로 제조사 번호를 갱신합니다."""

    async def _stock_movement():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)

            async with db_adapter.get_session() as session:
                usecase = factory.create_mhd_sync_usecase(session)
                updated = await usecase.apply_stock_movement(product_id, comment)

            if updated:
                console.print(f"[green]✓ 제조사 번호가 {comment.strip()}(으)로 갱신되었습니다.[/green]")
            else:
                console.print("[yellow]변경 사항이 없습니다.[/yellow]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_stock_movement())


@app.command("parse")
def parse_token(
    token: str = typer.Argument(..., help="DDMMYY 토큰"),
    today: Optional[datetime] = typer.Option(None, "--today", formats=["%Y-%m-%d"], help="기준일 (YYYY-MM-DD)"),
):
    """토큰을 해석해 각 형식의 날짜를 표시합니다."""
    codec = DateTokenCodec()
    mhd_date = codec.decode(token)

    if mhd_date is None:
        console.print(f"[red]유효하지 않은 토큰입니다: '{token}'[/red]")
        raise typer.Exit(1)

    reference = _to_date(today) or date.today()

    table = Table(title=f"토큰 {token.strip()}")
    table.add_column("형식", style="cyan")
    table.add_column("값", style="green")
    table.add_row("날짜", mhd_date.isoformat())
    table.add_row("제목 표시", codec.format_for_display(mhd_date))
    table.add_row("설명 표시", codec.format_for_description(mhd_date))
    table.add_row("저장 형식", codec.format_for_storage(mhd_date))
    table.add_row("남은 일수", str(codec.days_until(mhd_date, reference)))
    console.print(table)
