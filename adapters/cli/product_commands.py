"""
상품 관리 CLI 명령어

상품 등록과 조회를 위한 CLI 명령어입니다.
상품을 등록하면 저장 이벤트와 같이 MHD 동기화가 바로 실행됩니다.
"""

import asyncio
import json
import uuid
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from core.domain.entities import Product, TextVariant
from adapters.db.database import initialize_database
from adapters.factory import AdapterFactory
from config.adapters import get_config

# CLI 앱 생성
app = typer.Typer(name="product", help="상품 관리 명령어")
console = Console()


@app.command("add")
def add_product(
    product_number: str = typer.Argument(..., help="상품 번호"),
    title: str = typer.Option(..., "--title", help="상품명"),
    description: Optional[str] = typer.Option(None, "--description", help="상품 설명 HTML"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="제조사 번호 (DDMMYY)"),
    languages: Optional[List[str]] = typer.Option(None, "--language", "-l", help="언어 ID (여러 번 지정 가능)"),
    sync: bool = typer.Option(True, "--sync/--no-sync", help="등록 후 MHD 동기화 실행"),
):
    """새 상품을 등록합니다."""

    async def _add():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)
            language_ids = languages or [config.get_default_language_id()]

            async with db_adapter.get_session() as session:
                repository = factory.create_product_repository(session)

                if await repository.get_by_product_number(product_number):
                    raise ValueError(f"이미 등록된 상품 번호입니다: {product_number}")

                product = await repository.create(
                    Product(
                        id=str(uuid.uuid4()),
                        product_number=product_number,
                        manufacturer_number=token,
                        variants=[
                            TextVariant(language_id=language_id, title=title, description=description)
                            for language_id in language_ids
                        ],
                    )
                )

                if sync:
                    usecase = factory.create_mhd_sync_usecase(session)
                    report = await usecase.sync_product(product.id)
                    console.print(f"MHD 상태: {report.state.value}")

            console.print("[green]✓ 상품이 등록되었습니다![/green]")
            console.print(f"상품 ID: {product.id}")
            console.print(f"상품 번호: {product.product_number}")

            await db_adapter.close()

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_add())


@app.command("list")
def list_products(
    limit: int = typer.Option(20, help="조회할 상품 수"),
    skip: int = typer.Option(0, help="건너뛸 상품 수"),
    with_token: bool = typer.Option(False, "--with-token", help="제조사 번호가 있는 상품만"),
):
    """상품 목록을 조회합니다."""

    async def _list():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)
            synchronizer = factory.create_synchronizer()
            language_id = config.get_default_language_id()

            async with db_adapter.get_session() as session:
                repository = factory.create_product_repository(session)
                if with_token:
                    products = await repository.list_with_token(skip=skip, limit=limit)
                else:
                    products = await repository.list_all(skip=skip, limit=limit)

            await db_adapter.close()

            if not products:
                console.print("[yellow]등록된 상품이 없습니다.[/yellow]")
                return

            table = Table(title="상품 목록")
            table.add_column("ID", style="cyan")
            table.add_column("상품 번호", style="green")
            table.add_column("제조사 번호", style="magenta")
            table.add_column("상품명", style="blue")
            table.add_column("남은 일수", style="yellow")

            for product in products:
                variant = product.get_variant(language_id) or (product.variants[0] if product.variants else None)
                days = variant.custom_fields.get(synchronizer.keys.mhd_days) if variant else None
                table.add_row(
                    product.id[:8] + "...",
                    product.product_number,
                    product.manufacturer_number or "-",
                    (variant.title if variant else None) or "-",
                    str(days) if days is not None else "-",
                )

            console.print(table)

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_list())


@app.command("show")
def show_product(
    product_ref: str = typer.Argument(..., help="상품 ID 또는 상품 번호"),
):
    """상품 상세 정보와 번역별 MHD 마커를 표시합니다."""

    async def _show():
        try:
            config = get_config()
            db_adapter = initialize_database(config)
            await db_adapter.initialize()

            factory = AdapterFactory(config)
            synchronizer = factory.create_synchronizer()

            async with db_adapter.get_session() as session:
                repository = factory.create_product_repository(session)
                product = await repository.get_by_id(product_ref)
                if product is None:
                    product = await repository.get_by_product_number(product_ref)

            await db_adapter.close()

            if product is None:
                raise ValueError(f"상품을 찾을 수 없습니다: {product_ref}")

            console.print(f"[bold]상품 {product.product_number}[/bold]")
            console.print(f"상품 ID: {product.id}")
            console.print(f"제조사 번호: {product.manufacturer_number or '-'}")

            for variant in product.variants:
                markers = synchronizer.extract_markers(variant)

                table = Table(title=f"번역 {variant.language_id}")
                table.add_column("항목", style="cyan")
                table.add_column("값", style="green")
                table.add_row("상품명", variant.title or "-")
                table.add_row("제목 MHD", markers["title_mhd"] or "-")
                table.add_row("설명 MHD", markers["description_mhd"] or "-")
                table.add_row("단품 EAN", markers["single_ean"] or "-")
                table.add_row("커스텀 필드", json.dumps(variant.custom_fields, ensure_ascii=False))
                console.print(table)

        except Exception as e:
            console.print(f"[red]오류: {str(e)}[/red]")
            raise typer.Exit(1)

    asyncio.run(_show())
