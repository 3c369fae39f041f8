"""Small interactive front end: pick a starter, roam the world map, battle.

Map movement, terrain and saving live elsewhere in the full game; this loop
only drives the battle layer and the town buildings.
"""
from __future__ import annotations
from typing import Callable

from pokeworld.core.errors import NoEligibleCreature, PokeworldError
from pokeworld.core.logging import logger
from pokeworld.data.items import BAG_ORDER, ItemKind
from pokeworld.encounters.generator import level_band
from pokeworld.game.context import GameContext
from pokeworld.system.settings import Settings
from pokeworld.ui.battle import KeyboardDecisions, RichBattleRenderer, console
from pokeworld.world.buildings import needs_healing, pc_listing, pokemart_buy, pokemon_center_heal
from pokeworld.world.difficulty import WORLD_SIZE
from pokeworld.world.npc import Trainer

DIRECTIONS = {"n": (0, -1), "s": (0, 1), "e": (1, 0), "w": (-1, 0)}
ENCOUNTER_CHANCE = 0.3
TRAINER_CHANCE = 0.1

HELP = """[bold]Commands[/bold]
  n/s/e/w  move one map     f  fly (x y)
  p  party   B  bag   c  Pokémon Center   m  Poké Mart   P  PC   q  quit"""


def choose_starter(ctx: GameContext, read: Callable[[str], str]):
    candidates = ctx.starter_candidates()
    console.print("[bold]Choose your starting creature:[/bold]")
    for i, c in enumerate(candidates):
        console.print(f"  Starter {i + 1}: {c.name}")
    while True:
        key = read("> ").strip()
        try:
            chosen = ctx.choose_starter(candidates, int(key) - 1 if key.isdigit() else -1)
            break
        except PokeworldError as e:
            console.print(f"[red]{e}[/red]")
    console.print(f"Congrats, you chose {chosen.name}!")


def show_party(ctx: GameContext):
    for i, c in enumerate(ctx.player.party.slots()):
        if c is not None:
            console.print(f"  {i + 1}: {c.name} Lv{c.level} HP: {c.current_hp}/{c.max_hp}")


def open_bag(ctx: GameContext, read: Callable[[str], str]):
    for i, k in enumerate(BAG_ORDER):
        console.print(f"  {i + 1}. {k.display_name}: {ctx.player.inventory[k]}")
    key = read("Item (or <): ").strip()
    if not key.isdigit() or not 1 <= int(key) <= len(BAG_ORDER):
        return
    result = ctx.battle_service.use_item_outside_battle(BAG_ORDER[int(key) - 1], 0)
    console.print(result.message if result.success else f"[red]{result.message}[/red]")


def mart(ctx: GameContext, read: Callable[[str], str]):
    console.print(f"Your money: ${ctx.player.money}")
    for i, k in enumerate(BAG_ORDER):
        console.print(f"  {i + 1}. {k.display_name}")
    key = read("Buy (or <): ").strip()
    if key.isdigit() and 1 <= int(key) <= len(BAG_ORDER):
        item: ItemKind = BAG_ORDER[int(key) - 1]
        if pokemart_buy(ctx.player, item):
            console.print(f"You purchased a {item.display_name}!")
        else:
            console.print("[red]You don't have enough money.[/red]")


def step(ctx: GameContext, dx: int, dy: int):
    x, y = ctx.map_idx
    nxt = (min(max(x + dx, 0), WORLD_SIZE - 1), min(max(y + dy, 0), WORLD_SIZE - 1))
    ctx.move_to_map(nxt)
    band = level_band(ctx.difficulty())
    console.print(f"Map {nxt} (distance {ctx.difficulty()}, levels {band.min}-{band.max})")
    roll = ctx.rng.random()
    try:
        if roll < TRAINER_CHANCE:
            trainer = Trainer(name="Youngster")
            console.print(f"{trainer.name} wants to battle!")
            outcome = ctx.battle_service.start_trainer_battle(trainer)
            console.print(f"Battle result: {outcome.value}")
        elif roll < TRAINER_CHANCE + ENCOUNTER_CHANCE:
            outcome = ctx.battle_service.encounter_wild()
            if outcome is not None:
                console.print(f"Battle result: {outcome.value}")
    except NoEligibleCreature as e:
        console.print(f"[red]{e}[/red]")


def run(read: Callable[[str], str] = input):
    settings = Settings.load()
    ctx = GameContext(settings, decisions=KeyboardDecisions(read), renderer=RichBattleRenderer())
    ctx.player.inventory.add(ItemKind.POKE_BALL, 5)
    ctx.player.inventory.add(ItemKind.POTION, 3)
    logger.info("GameStart", money=ctx.player.money)
    choose_starter(ctx, read)
    console.print(HELP)
    while True:
        try:
            cmd = read("overworld> ").strip()
        except EOFError:
            break
        if cmd == "q":
            break
        if cmd in DIRECTIONS:
            step(ctx, *DIRECTIONS[cmd])
        elif cmd.startswith("f"):
            parts = cmd.split()[1:]
            if len(parts) == 2 and all(p.lstrip("-").isdigit() for p in parts):
                try:
                    ctx.move_to_map((int(parts[0]), int(parts[1])))
                    console.print(f"Flew to {ctx.map_idx} (distance {ctx.difficulty()})")
                except PokeworldError as e:
                    console.print(f"[red]{e}[/red]")
        elif cmd == "p":
            show_party(ctx)
        elif cmd == "B":
            open_bag(ctx, read)
        elif cmd == "c":
            if needs_healing(ctx.player):
                pokemon_center_heal(ctx.player)
                console.print("Your party has been restored to full HP.")
            else:
                console.print("Your party is already healthy!")
        elif cmd == "m":
            mart(ctx, read)
        elif cmd == "P":
            listing = pc_listing(ctx.player)
            console.print("\n".join(listing) if listing else "No creatures here!")
        else:
            console.print(HELP)
    logger.info("GameExit")

if __name__ == "__main__":
    run()
