from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, transaction

from catalog.models import Account, Game, Skin
from catalog.rarity import normalize_rarity
from catalog.sample_data import DEFAULT_GAMES, SAMPLE_ACCOUNTS


class Command(BaseCommand):
    help = 'Loads the default games and, unless --games-only is given, the sample accounts'

    def add_arguments(self, parser):
        parser.add_argument('--games-only', action='store_true', help="Only create/update the games")
        parser.add_argument('--reset', action='store_true', help="Delete every listed account first")

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("--- Seeding catalog ---"))

        try:
            with transaction.atomic():
                games = self.seed_games()
                if options['reset']:
                    deleted, _ = Account.objects.all().delete()
                    self.stdout.write(self.style.WARNING(f"Removed {deleted} existing row(s)."))
                if not options['games_only']:
                    self.seed_accounts(games)
        except DatabaseError as e:
            raise CommandError(f"Seeding failed: {e}") from e

        self.stdout.write(self.style.SUCCESS("--- Catalog seeded successfully! ---"))

    def seed_games(self) -> dict[str, Game]:
        games = {}
        for data in DEFAULT_GAMES:
            defaults = {k: v for k, v in data.items() if k != 'slug'}
            game, created = Game.objects.update_or_create(slug=data['slug'], defaults=defaults)
            games[game.slug] = game
            if created:
                self.stdout.write(f"  Created game {game.name}")
        return games

    def seed_accounts(self, games: dict[str, Game]) -> None:
        created_count = 0
        for data in SAMPLE_ACCOUNTS:
            game = games[data['game']]
            if Account.objects.filter(game=game, title=data['title']).exists():
                continue

            account = Account.objects.create(
                title=data['title'],
                game=game,
                price=Decimal(data['price']),
                bundle=data.get('bundle', ''),
                featured=data.get('featured', False),
            )
            Skin.objects.bulk_create([
                Skin(account=account, name=name, rarity=normalize_rarity(rarity), position=index)
                for index, (name, rarity) in enumerate(data['skins'])
            ])
            created_count += 1

        self.stdout.write(self.style.SUCCESS(f"  Added {created_count} sample account(s)"))
