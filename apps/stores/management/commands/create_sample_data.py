"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data --owner user_2abc

This onboards the owner and creates:
- A store with the default inventory categories
- 5 inventory items (beans, milks, syrup, cups)
- Product categories, an Espresso and a Latte with size/temperature variants
- Recipes for the espresso and two latte variants
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Product, ProductCategory
from apps.catalog.services import build_variants, create_category, create_product
from apps.inventory.models import InventoryCategory, InventoryItem
from apps.inventory.services import create_inventory_item
from apps.recipes.models import Recipe
from apps.recipes.services import create_recipe
from apps.stores.models import Store
from apps.stores.services import create_store

LATTE_PRICES = {
    '8oz': Decimal('3.50'),
    '12oz': Decimal('4.00'),
    '16oz': Decimal('4.50'),
}


class Command(BaseCommand):
    help = 'Create sample data for one shop owner'

    def add_arguments(self, parser):
        parser.add_argument(
            '--owner',
            default='sample-owner',
            help='Owner id (the "sub" claim of the owner\'s access token)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear the owner\'s existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        owner_id = options['owner']

        if options['clear']:
            self.stdout.write(f'Clearing data of {owner_id}...')
            self.clear_data(owner_id)

        self.stdout.write(f'Creating sample data for {owner_id}...')

        create_store(owner_id=owner_id, name='Sample Coffee', address='Main Street 1')

        items = self.create_inventory(owner_id)
        products = self.create_products(owner_id)
        recipes = self.create_recipes(owner_id, products, items)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write(f'  {len(items)} inventory items')
        self.stdout.write(f'  {len(products)} products')
        self.stdout.write(f'  {len(recipes)} recipes')

    def clear_data(self, owner_id):
        """Remove everything the owner has, dependents first."""
        Recipe.objects.filter(owner_id=owner_id).delete()
        Product.objects.filter(owner_id=owner_id).delete()
        ProductCategory.objects.filter(owner_id=owner_id).delete()
        InventoryItem.objects.filter(owner_id=owner_id).delete()
        InventoryCategory.objects.filter(owner_id=owner_id).delete()
        Store.objects.filter(owner_id=owner_id).delete()

    def create_inventory(self, owner_id):
        """Create inventory items in the seeded categories."""
        self.stdout.write('  Creating inventory...')

        categories = {
            category.name: category.id
            for category in InventoryCategory.objects.filter(owner_id=owner_id)
        }

        items_data = [
            ('BEA-ESP', 'Espresso Blend', 'Coffee Beans', 'bag', 'g', 8, 3, '100.00', '1000'),
            ('MLK-WHL', 'Whole Milk', 'Milk & Cream', 'carton', 'ml', 12, 4, '2.40', '1000'),
            ('MLK-OAT', 'Oat Milk', 'Milk & Cream', 'carton', 'ml', 2, 3, '3.10', '1000'),
            ('SYR-VAN', 'Vanilla Syrup', 'Syrups & Sweeteners', 'bottle', 'ml', 0, 1, '8.50', '750'),
            ('CUP-12O', 'Paper Cup 12oz', 'Cups & Lids', 'sleeve', 'pcs', 20, 5, '6.00', '50'),
        ]

        items = {}
        for sku, name, category, order_unit, unit, quantity, reorder, price, amount in items_data:
            items[sku] = create_inventory_item(
                owner_id=owner_id,
                sku=sku,
                name=name,
                category_id=categories[category],
                order_unit=order_unit,
                unit=unit,
                quantity=quantity,
                reorder_level=reorder,
                unit_price=Decimal(price),
                amount_per_unit=Decimal(amount),
            )
        return items

    def create_products(self, owner_id):
        """Create an Espresso and a Latte sold in three sizes, hot or iced."""
        self.stdout.write('  Creating products...')

        drinks = create_category(owner_id=owner_id, name='Hot Drinks')

        espresso, _ = create_product(
            owner_id=owner_id,
            name='Espresso',
            base_price=Decimal('2.50'),
            category_id=drinks.id,
            sku='ESP-001',
        )

        options = [
            {'name': 'Size', 'values': [{'value': size} for size in LATTE_PRICES]},
            {'name': 'Temp', 'values': [{'value': 'Hot'}, {'value': 'Iced'}]},
        ]
        variants = build_variants(product_name='Latte', options=options, base_price=LATTE_PRICES['8oz'])
        for variant in variants:
            size = variant['title'].split(' / ')[0]
            variant['price'] = LATTE_PRICES[size]

        latte, _ = create_product(
            owner_id=owner_id,
            name='Latte',
            base_price=LATTE_PRICES['8oz'],
            category_id=drinks.id,
            has_variants=True,
            variant_options=options,
            variants=variants,
        )
        return {'espresso': espresso, 'latte': latte}

    def create_recipes(self, owner_id, products, items):
        """Create recipes using the inventory items."""
        self.stdout.write('  Creating recipes...')

        beans = items['BEA-ESP'].id
        milk = items['MLK-WHL'].id
        cup = items['CUP-12O'].id
        latte = products['latte']

        recipes = [
            create_recipe(
                owner_id=owner_id,
                name='Espresso',
                product_id=products['espresso'].id,
                instructions='Grind 18 g, tamp, pull for 25 seconds.',
                prep_time_minutes=2,
                ingredients=[{'inventory_item': beans, 'quantity': Decimal('18')}],
            )
        ]

        for title, milk_ml in [('12oz / Hot', '200'), ('12oz / Iced', '150')]:
            recipes.append(create_recipe(
                owner_id=owner_id,
                name=f'Latte {title}',
                product_id=latte.id,
                product_variant_id=latte.variants.get(title=title).id,
                prep_time_minutes=4,
                ingredients=[
                    {'inventory_item': beans, 'quantity': Decimal('18')},
                    {'inventory_item': milk, 'quantity': Decimal(milk_ml)},
                    {'inventory_item': cup, 'quantity': Decimal('1')},
                ],
            ))
        return recipes
