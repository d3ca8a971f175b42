from .attribute_service import AttributeKind, AttributeResource, AttributeService, RESOURCES
from .buyer_service import BuyerService
from .category_service import CategoryService
from .dashboard_service import DashboardService, DashboardStats
from .enrichment_service import EnrichmentService, ReferenceLookups
from .form_controller import FormController, ValidationResult
from .mutation_dispatcher import MutationDispatcher, send_first_accepted
from .order_service import OrderService, filter_orders, status_counts
from .product_service import ProductService
from .resource_store import ResourceStore, fetch_record
from .seller_service import SellerService, seller_summary
from .response_normalizer import EnvelopeShape, NormalizedCollection, normalize_collection
from .slider_service import SliderService
from .subcategory_service import SubCategoryService

__all__ = [
    "AttributeKind",
    "AttributeResource",
    "AttributeService",
    "RESOURCES",
    "BuyerService",
    "CategoryService",
    "DashboardService",
    "DashboardStats",
    "EnrichmentService",
    "ReferenceLookups",
    "FormController",
    "ValidationResult",
    "MutationDispatcher",
    "send_first_accepted",
    "OrderService",
    "filter_orders",
    "status_counts",
    "ProductService",
    "ResourceStore",
    "fetch_record",
    "EnvelopeShape",
    "NormalizedCollection",
    "normalize_collection",
    "SellerService",
    "seller_summary",
    "SliderService",
    "SubCategoryService",
]
