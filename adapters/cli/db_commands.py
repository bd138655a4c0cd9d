"""
데이터베이스 관리 CLI 명령어

데이터베이스 초기화, 리셋, 테이블 조회를 위한 CLI 명령어입니다.
"""

import asyncio
import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from adapters.db.database import initialize_database
from config.adapters import get_config

# CLI 앱 생성
app = typer.Typer(name="db", help="데이터베이스 관리 명령어")
console = Console()


@app.command("init")
def init_database():
    """데이터베이스를 초기화합니다."""

    async def _init():
        try:
            console.print("[blue]데이터베이스 초기화 시작...[/blue]")

            # 설정 및 데이터베이스 초기화
            config = get_config()
            db_adapter = initialize_database(config)

            # 데이터베이스 초기화 (테이블 생성)
            await db_adapter.initialize()
            await db_adapter.create_tables()

            console.print("[green]✓ 데이터베이스 초기화가 완료되었습니다![/green]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_init())


@app.command("reset")
def reset_database(
    yes: bool = typer.Option(False, "--yes", "-y", help="확인 없이 실행"),
):
    """데이터베이스를 리셋합니다. (모든 데이터 삭제)"""

    if not yes:
        confirm = typer.confirm("모든 데이터가 삭제됩니다. 계속하시겠습니까?")
        if not confirm:
            console.print("[yellow]취소되었습니다.[/yellow]")
            return

    async def _reset():
        try:
            console.print("[blue]데이터베이스 리셋 시작...[/blue]")

            config = get_config()
            db_adapter = initialize_database(config)

            # 테이블 삭제 후 재생성
            await db_adapter.initialize()
            await db_adapter.reset()

            console.print("[green]✓ 데이터베이스 리셋이 완료되었습니다![/green]")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_reset())


@app.command("products")
def show_products():
    """상품 테이블과 번역 수를 조회합니다."""

    async def _show_products():
        try:
            console.print("[blue]상품 테이블 조회 중...[/blue]")

            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            async with db_adapter.get_session() as session:
                result = await session.execute(text("""
                    SELECT p.id, p.product_number, p.manufacturer_number, p.updated_at,
                           COUNT(t.language_id) AS translation_count
                    FROM products p
                    LEFT JOIN product_translations t ON t.product_id = p.id
                    GROUP BY p.id, p.product_number, p.manufacturer_number, p.updated_at
                    ORDER BY p.product_number
                """))
                products = result.fetchall()

            await db_adapter.close()

            if not products:
                console.print("[yellow]상품 테이블이 비어있습니다.[/yellow]")
                return

            table = Table(title="상품 테이블")
            table.add_column("ID", style="cyan")
            table.add_column("상품 번호", style="green")
            table.add_column("제조사 번호", style="magenta")
            table.add_column("번역 수", style="blue")
            table.add_column("업데이트일", style="dim")

            for product in products:
                table.add_row(
                    str(product.id)[:8] + "...",
                    product.product_number,
                    product.manufacturer_number or "-",
                    str(product.translation_count),
                    str(product.updated_at) if product.updated_at else "-",
                )

            console.print(table)

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_show_products())


if __name__ == "__main__":
    app()
