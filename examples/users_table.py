"""
Users Table Example - Paging, filtering and row actions on the demo directory.
"""

import asyncio

from swarm_admin import AdminClient, ValidationError
from swarm_admin.config import get_settings, configure_logging


def print_rows(table):
    for row in table.rows:
        print(f"  {row.user_id:<8} {row.name:<20} {row.role:<8} {row.status}")
    print(f"  page {table.page_index + 1}/{table.page_count}, {table.total_count} users")


async def main():
    settings = get_settings()
    configure_logging(settings)

    client = AdminClient.from_settings(settings)
    table = client.users_table()

    # First page
    await table.refresh()
    print("All users:")
    print_rows(table)

    # Filter by role
    await table.set_filter("role", "Manager")
    print("\nManagers:")
    print_rows(table)
    await table.clear_filters()

    # Create a user (form errors come back as ValidationError)
    try:
        await table.create_row({"name": "K", "email": "nope", "role": "Staff", "status": "Active"})
    except ValidationError as exc:
        print(f"\nRejected: {exc.as_dict()}")

    result = await table.create_row({
        "name": "Kara Thrace",
        "email": "kara@example.com",
        "role": "Staff",
        "status": "Active",
        "password": "starbuck99",
        "confirm_password": "starbuck99",
    })
    print(f"\n{result.message}")
    print_rows(table)

    # Delete it again
    result = await table.delete_row(result.record.user_id)
    print(f"\n{result.message}")

    # Permission matrix: the Admin row is read-only
    matrix = client.permission_matrix()
    await matrix.load()
    ok = await matrix.toggle("role_admin", "auditlog:view", True)
    print(f"\nToggle on Admin applied: {ok} ({matrix.last_error})")

    stats = await client.fetch_dashboard_stats()
    print(f"\nDashboard: {stats.active_users}/{stats.total_users} active, by role {stats.users_by_role}")


if __name__ == "__main__":
    asyncio.run(main())
