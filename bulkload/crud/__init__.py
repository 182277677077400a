from .master import (
    get_client_by_company_name,
    get_driver_by_document_number,
    get_truck_by_domain,
    get_product_by_name,
    find_or_create_client,
    find_or_create_driver,
    find_or_create_truck,
    find_or_create_product,
)

from .order import (
    get_order_by_number,
    get_order_by_external_code,
    get_order_by_activation_code,
    list_orders,
    create_order,
    transition_order,
    update_live_readout,
    lock_order_for_reading,
)

from .telemetry import (
    create_order_detail,
    list_order_details,
    get_latest_order_detail,
    get_last_timestamp,
    get_telemetry_averages,
)

from .status_log import create_status_log, list_status_logs

from .alarm import (
    create_alarm,
    get_alarm,
    list_alarms,
    list_alarms_by_order,
    acknowledge_alarm,
)

from .alert_config import (
    get_alert_config,
    get_or_create_alert_config,
    update_alert_config,
    claim_email_sent,
    reset_email_sent,
)

__all__ = [
    # Master data
    "get_client_by_company_name",
    "get_driver_by_document_number",
    "get_truck_by_domain",
    "get_product_by_name",
    "find_or_create_client",
    "find_or_create_driver",
    "find_or_create_truck",
    "find_or_create_product",

    # Orders
    "get_order_by_number",
    "get_order_by_external_code",
    "get_order_by_activation_code",
    "list_orders",
    "create_order",
    "transition_order",
    "update_live_readout",
    "lock_order_for_reading",

    # Telemetry
    "create_order_detail",
    "list_order_details",
    "get_latest_order_detail",
    "get_last_timestamp",
    "get_telemetry_averages",

    # Audit log
    "create_status_log",
    "list_status_logs",

    # Alarms
    "create_alarm",
    "get_alarm",
    "list_alarms",
    "list_alarms_by_order",
    "acknowledge_alarm",

    # Alert config
    "get_alert_config",
    "get_or_create_alert_config",
    "update_alert_config",
    "claim_email_sent",
    "reset_email_sent",
]
