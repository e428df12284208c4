"""Sales store operations."""

from .service import (
    DepotReportView,
    add_product,
    build_depot_report,
    clear_depot,
    delete_record,
    list_depots,
    remove_product,
    report_title,
    require_depot,
    reset_product_names,
    select_depot,
    select_period,
    selectable_years,
    selected_depot,
    selected_period,
    set_product_names,
    submit_entry,
)

__all__ = [
    "DepotReportView",
    "add_product",
    "build_depot_report",
    "clear_depot",
    "delete_record",
    "list_depots",
    "remove_product",
    "report_title",
    "require_depot",
    "reset_product_names",
    "select_depot",
    "select_period",
    "selectable_years",
    "selected_depot",
    "selected_period",
    "set_product_names",
    "submit_entry",
]
