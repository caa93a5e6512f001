#!/usr/bin/env python3

import json
import sys

from cli.session import current_user, form_from_args
from config import get_seed_dir
from errors import ValidationError
from logger import get_logger

logger = get_logger()

_CATEGORY_FIELDS = ("name", "type", "description", "color", "icon")


def cmd_list(args, services):
    """List the user's categories."""
    user = current_user(args, services)

    if args.type:
        categories = services.categories.find_by_type(user.id, args.type)
    else:
        categories = services.categories.find_all(user.id)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name} ({category.type})")
        if category.description:
            logger.info(f"Description: {category.description}")
        if category.color:
            logger.info(f"Color: {category.color}")
        if category.icon:
            logger.info(f"Icon: {category.icon}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    user = current_user(args, services)
    category = services.categories.create(user, form_from_args(args, _CATEGORY_FIELDS))

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Type: {category.type}")


def cmd_edit(args, services):
    """Edit a category; options not given keep their current value."""
    user = current_user(args, services)
    category = services.categories.get_owned(args.category_id, user)

    current = {field: getattr(category, field) for field in _CATEGORY_FIELDS}
    updated = services.categories.update(
        category.id, user, form_from_args(args, _CATEGORY_FIELDS, current)
    )

    logger.info(f"✓ Category {updated.id} updated: {updated.name} ({updated.type})")


def cmd_delete(args, services):
    """Delete a category by ID."""
    user = current_user(args, services)
    category = services.categories.get_owned(args.category_id, user)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")

    confirm = (
        input("\nAre you sure you want to delete this category? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    if services.categories.delete(category.id, user):
        logger.info(f"✓ Category '{category.name}' deleted successfully.")
    else:
        logger.error("Failed to delete category.")
        sys.exit(1)


def cmd_seed(args, services):
    """Create the default category set for the user."""
    user = current_user(args, services)
    seed_file = get_seed_dir() / "categories.json"

    with open(seed_file, "r") as f:
        categories_data = json.load(f)

    logger.info("\nSeeding categories from db/seed/categories.json")
    logger.info("=" * 80)

    created_count = 0
    skipped_count = 0

    for category_data in categories_data:
        name = category_data.get("name")
        if not name:
            logger.warning("Skipping category with no name")
            continue

        if services.categories.find_by_name(user.id, name):
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            skipped_count += 1
            continue

        try:
            category = services.categories.create(user, category_data)
        except ValidationError as e:
            logger.error(f"Error creating category '{name}': {e}")
            continue

        logger.info(f"✓ Created '{name}' (ID: {category.id})")
        created_count += 1

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")


def _add_category_options(parser, required: bool):
    parser.add_argument("--name", required=required, help="Category name")
    parser.add_argument(
        "--type", required=required, choices=["income", "expense"], help="Category type"
    )
    parser.add_argument("--description", help="Optional description")
    parser.add_argument("--color", help="Hex color, e.g. #E53935")
    parser.add_argument("--icon", help="Icon name")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, edit and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List categories")
    list_parser.add_argument(
        "--type", choices=["income", "expense"], help="Only list one type"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    _add_category_options(create_parser, required=True)
    create_parser.set_defaults(func=cmd_create)

    # categories edit
    edit_parser = categories_subparsers.add_parser("edit", help="Edit a category")
    edit_parser.add_argument("category_id", type=int, help="ID of the category")
    _add_category_options(edit_parser, required=False)
    edit_parser.set_defaults(func=cmd_edit)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories"
    )
    seed_parser.set_defaults(func=cmd_seed)
