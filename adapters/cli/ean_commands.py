"""
단품 EAN CLI 명령어

EanManagementUseCase를 CLI 명령으로 노출하는 어댑터입니다.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adapters.db.database import initialize_database
from adapters.factory import AdapterFactory
from config.adapters import get_config

# CLI 앱 생성
app = typer.Typer(name="ean", help="단품 EAN 관리 명령어")
console = Console()


@app.command("set")
def set_ean(
    product_id: str = typer.Argument(..., help="상품 ID"),
    ean: Optional[str] = typer.Argument(None, help="EAN 코드 (8자리 또는 13자리)"),
    clear: bool = typer.Option(False, "--clear", help="단품 EAN 제거"),
):
    """상품의 단품 EAN을 설정하거나 제거합니다."""

    if not ean and not clear:
        console.print("[red]오류: EAN 코드를 입력하거나 --clear 옵션을 지정하세요.[/red]")
        raise typer.Exit(1)

    async def _set():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)

            async with db_adapter.get_session() as session:
                usecase = factory.create_ean_management_usecase(session)
                changed = await usecase.update_product_ean(product_id, None if clear else ean)

            if not changed:
                console.print("[yellow]변경 사항이 없습니다.[/yellow]")
            elif clear:
                console.print("[green]✓ 단품 EAN이 제거되었습니다![/green]")
            else:
                console.print(f"[green]✓ 단품 EAN이 {ean}(으)로 설정되었습니다![/green]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_set())


@app.command("refresh")
def refresh_ean(
    product_id: str = typer.Argument(..., help="상품 ID"),
):
    """저장된 단품 EAN 값에 맞춰 설명의 EAN span을 다시 씁니다."""

    async def _refresh():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)

            async with db_adapter.get_session() as session:
                usecase = factory.create_ean_management_usecase(session)
                changed = await usecase.refresh_product_ean(product_id)

            if changed:
                console.print("[green]✓ EAN span이 갱신되었습니다![/green]")
            else:
                console.print("[yellow]변경 사항이 없습니다.[/yellow]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_refresh())


@app.command("migrate")
def migrate_legacy_ean(
    batch_size: Optional[int] = typer.Option(None, "--batch-size", "-b", help="배치 크기 (기본값: 설정값)"),
):
    """레거시 EAN 필드를 단품 EAN 필드로 옮깁니다."""

    async def _migrate():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)

            console.print("[blue]레거시 EAN 마이그레이션 시작...[/blue]")
            async with db_adapter.get_session() as session:
                usecase = factory.create_ean_management_usecase(session)
                stats = await usecase.batch_migrate_legacy_ean(batch_size or config.get_sync_batch_size())

            table = Table(title="레거시 EAN 마이그레이션 결과")
            table.add_column("항목", style="cyan")
            table.add_column("값", style="green")
            table.add_row("전체", str(stats.total))
            table.add_row("완료", str(stats.migrated))
            table.add_row("건너뜀", str(stats.skipped))
            table.add_row("실패", str(stats.failed))
            console.print(table)

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_migrate())
