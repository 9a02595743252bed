# ============================================
# ADMIN ROLE → PERMISSIONS (claims template)
# ============================================
# Order matters: every admin created by the setup flow
# receives exactly this list, in this order.

ADMIN_ROLE = "admin"
ADMIN_LEVEL = 100

ADMIN_PERMISSIONS = (
    # Dashboard
    "accessAdminDashboard",

    # Catalog
    "manageProducts",
    "manageCategories",

    # Users & orders
    "manageUsers",
    "manageOrders",
    "manageReviews",

    # Promotions
    "manageCoupons",
    "manageFlashSales",

    # Reporting & settings
    "viewAnalytics",
    "manageSettings",
    "manageContent",
    "exportData",

    # Operations
    "manageInventory",
    "processRefunds",
    "manageShipping",
    "moderateContent",
)


# Display labels stored on the profile's role copy
ADMIN_ROLE_LABELS = {
    "display_name": "Administrator",
    "display_name_ar": "مدير النظام",
}
