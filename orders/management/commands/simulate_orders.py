import time

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from authentication.models import Business
from orders.simulator import DemoOrderSimulator


class Command(BaseCommand):
    help = "Fabricate demo kitchen orders for a business (requires DEMO_ORDERS_ENABLED)"

    def add_arguments(self, parser):
        parser.add_argument('business', help="Business slug")
        parser.add_argument('--interval', type=float, default=25.0, help="Seconds between ticks")
        parser.add_argument('--probability', type=float, default=0.15, help="Chance of an order per tick")
        parser.add_argument('--iterations', type=int, default=0, help="Stop after N ticks (0 runs forever)")

    def handle(self, *args, **options):
        try:
            business = Business.objects.get(slug=options['business'])
        except Business.DoesNotExist:
            raise CommandError(f"Business '{options['business']}' not found")

        try:
            simulator = DemoOrderSimulator(business, probability=options['probability'])
        except ImproperlyConfigured as exc:
            raise CommandError(str(exc))

        ticks = 0
        while not options['iterations'] or ticks < options['iterations']:
            order = simulator.tick()
            if order is not None:
                self.stdout.write(self.style.SUCCESS(
                    f"New demo order #{order.short_number} from {order.customer_name}"
                ))
            ticks += 1
            if not options['iterations'] or ticks < options['iterations']:
                time.sleep(options['interval'])
