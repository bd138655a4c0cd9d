"""
MHD(최소 유통기한) 동기화 시스템

메인 진입점 파일입니다.
"""

import asyncio
import typer
from rich.console import Console

from adapters.cli.db_commands import app as db_app
from adapters.cli.ean_commands import app as ean_app
from adapters.cli.product_commands import app as product_app
from adapters.cli.sync_commands import app as sync_app
from adapters.db.database import initialize_database
from config.adapters import get_config

__version__ = "1.0.0"

# 메인 CLI 앱
app = typer.Typer(
    name="mhd",
    help="상품 MHD(최소 유통기한) 동기화 시스템",
    no_args_is_help=True,
)

# 서브 명령어 추가
app.add_typer(sync_app, name="sync")
app.add_typer(product_app, name="product")
app.add_typer(ean_app, name="ean")
app.add_typer(db_app, name="db")

console = Console()


@app.command("init-db")
def init_database(
    drop_existing: bool = typer.Option(False, "--drop", help="기존 테이블을 삭제하고 재생성"),
):
    """데이터베이스를 초기화합니다."""

    async def _init_db():
        try:
            config = get_config()
            console.print(f"[blue]환경: {config.get_environment()}[/blue]")
            console.print(f"[blue]데이터베이스: {config.get_database_url()}[/blue]")

            # 데이터베이스 어댑터 초기화
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            if drop_existing:
                console.print("[yellow]기존 테이블을 삭제하는 중...[/yellow]")
                await db_adapter.drop_tables()

            console.print("[blue]데이터베이스 테이블을 생성하는 중...[/blue]")
            await db_adapter.create_tables()

            console.print("[green]✓ 데이터베이스가 성공적으로 초기화되었습니다![/green]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_init_db())


@app.command("version")
def show_version():
    """버전 정보를 표시합니다."""
    console.print("[bold]상품 MHD 동기화 시스템[/bold]")
    console.print(f"버전: {__version__}")


@app.command("config")
def show_config():
    """현재 설정을 표시합니다."""
    try:
        config = get_config()

        console.print("[bold]현재 설정[/bold]")
        console.print(f"환경: {config.get_environment()}")
        console.print(f"디버그 모드: {config.is_debug()}")
        console.print(f"데이터베이스 URL: {config.get_database_url()}")
        console.print(f"로그 레벨: {config.get_log_level()}")
        console.print(f"동기화 배치 크기: {config.get_sync_batch_size()}")
        console.print(f"기본 언어: {config.get_default_language_id()}")
        console.print(f"활성 판매 채널: {', '.join(config.get_enabled_sales_channels()) or '전체'}")
        console.print(f"MHD 날짜 필드: {config.get_mhd_date_field()}")
        console.print(f"남은 일수 필드: {config.get_mhd_days_field()}")
        console.print(f"표시용 유통기한 필드: {config.get_expiry_display_field() or '-'}")
        console.print(f"단품 EAN 필드: {config.get_single_ean_field()}")
        console.print(f"레거시 EAN 필드: {config.get_legacy_ean_field()}")

    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
