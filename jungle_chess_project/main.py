#!/usr/bin/env python3
"""
Jungle Chess 主入口文件

提供命令行接口：查看棋盘、双人轮流对弈、生成默认配置。
渲染只使用会话提供的只读棋盘视图。
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jungle_chess_project import __version__, __description__
from jungle_chess_project.src.jungle_engine.config import ConfigManager, GameConfig, load_layout_file
from jungle_chess_project.src.jungle_engine.rules_engine import (
    BoardView, GameSession, LayoutGameFactory, Position, TerrainType, create_session
)
from jungle_chess_project.src.jungle_engine.utils import JungleError, set_level, setup_logger

console = Console()

# 地形底色
TERRAIN_STYLES = {
    TerrainType.NORMAL: "on grey23",
    TerrainType.WATER: "on blue",
    TerrainType.TRAP: "on dark_orange3",
    TerrainType.DEN: "on dark_green",
}

TERRAIN_MARKS = {
    TerrainType.NORMAL: " . ",
    TerrainType.WATER: " ~ ",
    TerrainType.TRAP: " # ",
    TerrainType.DEN: " @ ",
}

# 被拒绝原因的说明
REJECTION_MESSAGES = {
    "turn_ownership": "还没轮到这枚棋子的主人",
    "movement": "该棋子不能这样移动",
    "rank_capture": "等级不足，无法吃掉目标",
    "special_capture": "河中与岸上之间不能互吃",
    "water_movement": "只有鼠可以下河",
    "den": "不能进入己方兽穴",
    "no_piece": "起始位置没有棋子",
    "game_over": "对局已经结束",
}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("Jungle Chess\n", style="bold green")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    console.print(Panel(
        banner_text,
        title="斗兽棋",
        title_align="center",
        border_style="green",
        padding=(1, 2)
    ))


def render_board(view: BoardView, first_player: Optional[int] = None) -> Table:
    """
    渲染棋盘

    先手玩家的棋子用大写字母，其他玩家用小写字母；y 轴从上到下递减。
    """
    terrain = view.terrain_matrix()
    table = Table(show_header=True, show_lines=False, box=None, padding=(0, 0))
    table.add_column("", justify="right")
    for x in range(view.width):
        table.add_column(chr(ord('a') + x), justify="center")

    occupants = {pos: piece for pos, piece in view.get_pieces()}
    if first_player is None and occupants:
        first_player = min(piece.owner for piece in occupants.values())

    for y in reversed(range(view.height)):
        row = [Text(f"{y} ")]
        for x in range(view.width):
            kind = TerrainType(int(terrain[y, x]))
            style = TERRAIN_STYLES[kind]
            piece = occupants.get(Position(x, y))
            if piece is None:
                row.append(Text(TERRAIN_MARKS[kind], style=style))
            elif piece.owner == first_player:
                row.append(Text(f" {piece.species.symbol} ", style=f"bold white {style}"))
            else:
                row.append(Text(f" {piece.species.symbol.lower()} ", style=f"bold red {style}"))
        table.add_row(*row)
    return table


def _load_factory(layout: Optional[str]) -> LayoutGameFactory:
    if not layout:
        return LayoutGameFactory()
    return LayoutGameFactory(load_layout_file(layout))


def _parse_command(line: str):
    """
    解析输入：'x1 y1 x2 y2' 或坐标记法 'a2 a3' / 'a2a3'

    Returns:
        (from_pos, to_pos) 或 None
    """
    parts = line.replace(",", " ").split()
    if len(parts) == 4 and all(p.lstrip('-').isdigit() for p in parts):
        x1, y1, x2, y2 = (int(p) for p in parts)
        return Position(x1, y1), Position(x2, y2)
    if len(parts) == 1 and len(parts[0]) >= 4:
        token = parts[0]
        split_at = next((i for i in range(2, len(token)) if token[i].isalpha()), None)
        if split_at is None:
            return None
        parts = [token[:split_at], token[split_at:]]
    if len(parts) == 2:
        try:
            return Position.from_notation(parts[0]), Position.from_notation(parts[1])
        except ValueError:
            return None
    return None


def play_loop(session: GameSession):
    """双人轮流对弈循环"""
    first_player = session.players[0].player_id
    while True:
        console.print(render_board(session.board(), first_player))
        if session.is_over:
            console.print(f"[bold green]对局结束，胜者: 玩家 {session.winner}[/bold green]")
            break

        line = click.prompt(f"玩家 {session.current_player()} 走子 (x1 y1 x2 y2 / undo / pass / quit)")
        command = line.strip().lower()
        if command in ("quit", "exit", "q"):
            break
        if command == "undo":
            if not session.undo():
                console.print("[yellow]没有可以撤销的走法[/yellow]")
            continue
        if command == "pass":
            session.pass_turn()
            continue

        parsed = _parse_command(command)
        if parsed is None:
            console.print("[yellow]无法识别的输入[/yellow]")
            continue

        from_pos, to_pos = parsed
        try:
            outcome = session.request_move(from_pos, to_pos)
        except JungleError as e:
            console.print(f"[red]{e}[/red]")
            continue

        if not outcome.accepted:
            reason = REJECTION_MESSAGES.get(outcome.reason, outcome.reason)
            console.print(f"[yellow]走法被拒绝: {reason}[/yellow]")
        elif outcome.captured is not None:
            console.print(f"[cyan]{outcome.move.piece.name} 吃掉了 {outcome.captured.name}[/cyan]")


@click.group()
@click.version_option(version=__version__, prog_name="Jungle Chess")
@click.option('--debug', is_flag=True, help='启用调试模式')
def cli(debug: bool):
    """斗兽棋 - 规则引擎与控制台对弈"""
    setup_logger('jungle', level='DEBUG' if debug else 'WARNING')
    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")


@cli.command()
def info():
    """显示系统信息"""
    print_banner()


@cli.command('show-board')
@click.option('--layout', type=click.Path(exists=True), help='布局文件路径')
def show_board(layout: Optional[str]):
    """显示初始棋盘"""
    session = create_session(_load_factory(layout))
    console.print(render_board(session.board(), session.players[0].player_id))


@cli.command()
@click.option('--layout', type=click.Path(exists=True), help='布局文件路径')
@click.option('--config-dir', type=click.Path(file_okay=False), help='配置目录，读取其中的对局配置')
@click.option('--no-undo', is_flag=True, help='禁止悔棋')
def play(layout: Optional[str], config_dir: Optional[str], no_undo: bool):
    """双人轮流对弈"""
    config = GameConfig()
    if config_dir:
        config = ConfigManager(config_dir).get_game_config()
        set_level(config.log_level)

    session = create_session(_load_factory(layout or config.layout_file or None), config=config)
    if no_undo:
        session.config.allow_undo = False
    play_loop(session)


@cli.command('init-config')
@click.option('--dir', 'config_dir', type=click.Path(),
              default='jungle_chess_project/configs/jungle_engine', help='配置目录')
def init_config(config_dir: str):
    """生成默认配置文件"""
    manager = ConfigManager(config_dir)
    for name, path in manager.config_files.items():
        console.print(f"[green]{name}: {path}[/green]")


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except JungleError as e:
        console.print(f"[red]发生错误: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
