# Overview: Built-in permission catalog entries organized by category.
# Each entry is a plain dict; permissions.catalog turns them into PermissionDefinition records.
#
# Naming:
# - layout:   {panel}.layout
# - view:     {panel}.{page}.view
# - function: {resource}.{operation}

from .categories import PermissionAction, PermissionCategory, PermissionType


# -- LAYOUT --

LAYOUT_PERMISSIONS = [
    {
        "name": "admin.layout",
        "category": PermissionCategory.LAYOUT,
        "resource_path": "admin",
        "action": PermissionAction.ACCESS,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Admin Panel Erişimi", "en": "Admin Panel Access"},
        "description": {
            "tr": "Admin paneline erişim yetkisi",
            "en": "Access permission to admin panel",
        },
        "used_in": ["AdminPageGuard", "AdminLayout"],
    },
    {
        "name": "customer.layout",
        "category": PermissionCategory.LAYOUT,
        "resource_path": "customer",
        "action": PermissionAction.ACCESS,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Müşteri Panel Erişimi", "en": "Customer Panel Access"},
        "description": {
            "tr": "Müşteri paneline erişim yetkisi",
            "en": "Access permission to customer panel",
        },
        "used_in": ["CustomerPageGuard", "CustomerLayout"],
    },
]


# -- VIEW --

VIEW_PERMISSIONS = [
    {
        "name": "admin.dashboard.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "dashboard",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "CRM Dashboard Görüntüleme", "en": "CRM Dashboard View"},
        "description": {
            "tr": "CRM dashboard sayfasını görüntüleme ve müşteri istatistiklerini okuma yetkisi",
            "en": "Permission to view CRM dashboard page and read customer statistics",
        },
        "dev_notes": "Covers /api/admin/crm-stats and /api/admin/sessions",
        "dependencies": ["admin.layout"],
        "used_in": ["AdminDashboardClient", "/api/admin/crm-stats", "/api/admin/sessions"],
    },
    {
        "name": "admin.users.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "users",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Kullanıcı Yönetimi Görüntüleme", "en": "User Management View"},
        "description": {
            "tr": "Kullanıcı listesi sayfasını görüntüleme ve kullanıcı bilgilerini okuma yetkisi",
            "en": "Permission to view user management page and read user information",
        },
        "dev_notes": "User list API only; CRUD needs the users.* function permissions",
        "dependencies": ["admin.layout"],
        "used_in": ["UsersPageClient", "/api/users (GET)"],
    },
    {
        "name": "admin.customers.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "customers",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Müşteri Yönetimi Görüntüleme", "en": "Customer Management View"},
        "description": {
            "tr": "Müşteri listesi sayfasını görüntüleme ve müşteri bilgilerini okuma yetkisi",
            "en": "Permission to view customer management page and read customer information",
        },
        "dependencies": ["admin.layout"],
        "used_in": ["CustomersPageClient", "/api/admin/customers (GET)"],
    },
    {
        "name": "admin.roles.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "roles",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Rol Yönetimi Görüntüleme", "en": "Role Management View"},
        "description": {
            "tr": "Rol listesi sayfasını görüntüleme ve rol bilgilerini okuma yetkisi",
            "en": "Permission to view role management page and read role information",
        },
        "dev_notes": "Role list API only; role CRUD needs the roles.* function permissions",
        "dependencies": ["admin.layout"],
        "used_in": ["RolesPageClient", "/api/admin/roles (GET)"],
    },
    {
        "name": "admin.permissions.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "permissions",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Yetki Kataloğu Görüntüleme", "en": "Permission Catalog View"},
        "description": {
            "tr": "Yetki kataloğunu ve senkronize edilmiş yetkileri görüntüleme yetkisi",
            "en": "Permission to view the permission catalog and synchronized permissions",
        },
        "dependencies": ["admin.layout"],
        "used_in": ["PermissionsPageClient", "/api/admin/permissions (GET)", "/api/admin/catalog (GET)"],
    },
    {
        "name": "admin.profile.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "profile",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Admin Profil Görüntüleme", "en": "Admin Profile View"},
        "description": {
            "tr": "Admin profil sayfasını görüntüleme ve profil bilgilerini okuma yetkisi",
            "en": "Permission to view admin profile page and read profile information",
        },
        "dependencies": ["admin.layout"],
        "used_in": ["AdminProfileClient", "/api/admin/profile (GET)"],
    },
    {
        "name": "admin.support.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "support",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Destek Sistemi Görüntüleme", "en": "Support System View"},
        "description": {
            "tr": "Destek taleplerini görüntüleme ve yönetme yetkisi",
            "en": "Permission to view and manage support tickets",
        },
        "dependencies": ["admin.layout"],
        "used_in": ["SupportDashboard", "/api/admin/support"],
    },
    {
        "name": "customer.dashboard.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "dashboard",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Müşteri Dashboard Görüntüleme", "en": "Customer Dashboard View"},
        "description": {
            "tr": "Müşteri dashboard sayfasını görüntüleme ve kişisel istatistikleri okuma yetkisi",
            "en": "Permission to view customer dashboard page and read personal statistics",
        },
        "dependencies": ["customer.layout"],
        "used_in": ["CustomerDashboardClient"],
    },
    {
        "name": "customer.profile.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "profile",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Müşteri Profil Görüntüleme", "en": "Customer Profile View"},
        "description": {
            "tr": "Müşteri profil sayfasını görüntüleme ve kişisel bilgileri okuma yetkisi",
            "en": "Permission to view customer profile page and read personal information",
        },
        "dependencies": ["customer.layout"],
        "used_in": ["CustomerProfileClient"],
    },
    {
        "name": "customer.settings.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "settings",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Hesap Ayarlarım Görüntüleme", "en": "Account Settings View"},
        "description": {
            "tr": "Hesap ayarlarını ve tercihlerini görüntüleme yetkisi",
            "en": "Permission to view account settings and preferences",
        },
        "dependencies": ["customer.layout"],
        "used_in": ["CustomerSettingsClient", "/api/customer/settings"],
    },
    {
        "name": "customer.calendar.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "calendar",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Takvim Görüntüleme", "en": "Calendar View"},
        "description": {
            "tr": "Müşterinin kendi takvimini görüntüleme yetkisi",
            "en": "Permission to view own calendar",
        },
        "dependencies": ["customer.layout"],
        "used_in": ["CustomerCalendarClient", "/api/customer/calendar"],
    },
    {
        "name": "customer.support.view",
        "category": PermissionCategory.VIEW,
        "resource_path": "support",
        "action": PermissionAction.VIEW,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Destek Taleplerim Görüntüleme", "en": "My Support Tickets View"},
        "description": {
            "tr": "Kendi destek taleplerini görüntüleme yetkisi",
            "en": "Permission to view own support tickets",
        },
        "dependencies": ["customer.layout"],
        "used_in": ["CustomerSupportClient", "/api/customer/support"],
    },
]


# -- FUNCTION --

FUNCTION_PERMISSIONS = [
    # Support
    {
        "name": "support.tickets.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "support-tickets",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Destek Talebi Oluşturma", "en": "Create Support Ticket"},
        "description": {
            "tr": "Yeni destek talebi oluşturma yetkisi",
            "en": "Permission to create new support tickets",
        },
        "dev_notes": "POST /api/admin/support/tickets",
        "dependencies": ["admin.support.view"],
        "used_in": ["SupportTicketCreate", "/api/admin/support/tickets (POST)"],
    },
    {
        "name": "support.tickets.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "support-tickets",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Destek Talebi Güncelleme", "en": "Update Support Ticket"},
        "description": {
            "tr": "Destek talebi bilgilerini güncelleme yetkisi",
            "en": "Permission to update support ticket information",
        },
        "dev_notes": "PUT /api/admin/support/tickets/<id>",
        "dependencies": ["admin.support.view"],
        "used_in": ["SupportTicketEdit", "/api/admin/support/tickets/[id] (PUT)"],
    },
    {
        "name": "support.tickets.delete",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "support-tickets",
        "action": PermissionAction.DELETE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Destek Talebi Silme", "en": "Delete Support Ticket"},
        "description": {
            "tr": "Destek taleplerini silme yetkisi",
            "en": "Permission to delete support tickets",
        },
        "dev_notes": "DELETE /api/admin/support/tickets/<id>",
        "dependencies": ["admin.support.view"],
        "used_in": ["SupportTicketDelete", "/api/admin/support/tickets/[id] (DELETE)"],
    },
    {
        "name": "support.tickets.assign",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "support-tickets",
        "action": PermissionAction.MANAGE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Destek Talebi Atama", "en": "Assign Support Ticket"},
        "description": {
            "tr": "Destek taleplerini personele atama yetkisi",
            "en": "Permission to assign support tickets to staff",
        },
        "dev_notes": "POST /api/admin/support/tickets/<id>/assign",
        "dependencies": ["admin.support.view"],
        "used_in": ["SupportTicketAssign", "/api/admin/support/tickets/[id]/assign (POST)"],
    },
    {
        "name": "customer.support.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "support",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Destek Talebi Oluşturma", "en": "Create Support Ticket"},
        "description": {
            "tr": "Yeni destek talebi oluşturma yetkisi",
            "en": "Permission to create new support tickets",
        },
        "dev_notes": "POST /api/customer/support",
        "dependencies": ["customer.support.view"],
        "used_in": ["CustomerSupportCreate", "/api/customer/support (POST)"],
    },

    # Users
    {
        "name": "users.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "users",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Kullanıcı Oluşturma", "en": "Create User"},
        "description": {
            "tr": "Yeni kullanıcı hesabı oluşturma ve başlangıç ayarlarını yapılandırma yetkisi",
            "en": "Permission to create new user accounts and configure initial settings",
        },
        "dev_notes": "POST /api/users, including email validation and password hashing",
        "dependencies": ["admin.users.view"],
        "used_in": ["CreateUserModal", "/api/users (POST)", "AddUserDialog"],
    },
    {
        "name": "users.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "users",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Kullanıcı Güncelleme", "en": "Update User"},
        "description": {
            "tr": "Mevcut kullanıcı bilgilerini güncelleme ve hesap ayarlarını değiştirme yetkisi",
            "en": "Permission to update existing user information and modify account settings",
        },
        "dev_notes": "PATCH /api/users/<id>; editing your own account is excluded",
        "dependencies": ["admin.users.view"],
        "used_in": ["EditUserModal", "/api/users/[userId] (PATCH)", "UserEditForm"],
    },
    {
        "name": "users.delete",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "users",
        "action": PermissionAction.DELETE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Kullanıcı Silme", "en": "Delete User"},
        "description": {
            "tr": "Kullanıcı hesaplarını kalıcı olarak silme ve ilişkili verileri temizleme yetkisi",
            "en": "Permission to permanently delete user accounts and clean related data",
        },
        "dev_notes": "DELETE /api/users/<id>, cascades to related rows",
        "dependencies": ["admin.users.view"],
        "used_in": ["DeleteUserModal", "/api/users/[userId] (DELETE)", "BulkDeleteUsers"],
    },
    {
        "name": "users.assign-role",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "users",
        "action": PermissionAction.MANAGE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Kullanıcı Rol Atama", "en": "Assign User Role"},
        "description": {
            "tr": "Kullanıcılara rol atama ve rol bazlı yetkileri yönetme yetkisi",
            "en": "Permission to assign roles to users and manage role-based permissions",
        },
        "dev_notes": "Role assignment APIs, role hierarchy checks included",
        "dependencies": ["admin.users.view", "admin.roles.view"],
        "used_in": ["AssignRoleModal", "/api/admin/users/assign-role", "UserRoleManager"],
    },

    # Roles
    {
        "name": "roles.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "roles",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Rol Oluşturma", "en": "Create Role"},
        "description": {
            "tr": "Yeni sistem rolleri oluşturma ve temel yetkileri atama yetkisi",
            "en": "Permission to create new system roles and assign basic permissions",
        },
        "dev_notes": "POST /api/admin/roles",
        "dependencies": ["admin.roles.view"],
        "used_in": ["CreateRoleDialog", "/api/admin/roles (POST)"],
    },
    {
        "name": "roles.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "roles",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Rol Düzenleme", "en": "Edit Role"},
        "description": {
            "tr": "Rollerin görünen adını, rengini ve açıklamasını düzenleme yetkisi",
            "en": "Permission to edit the display name, colour and description of roles",
        },
        "dev_notes": "PUT /api/admin/roles/<name>; system default roles are refused",
        "dependencies": ["admin.roles.view"],
        "used_in": ["EditRoleDialog", "/api/admin/roles/[name] (PUT)"],
    },
    {
        "name": "roles.delete",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "roles",
        "action": PermissionAction.DELETE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Rol Silme", "en": "Delete Role"},
        "description": {
            "tr": "Sistem rollerini silme ve bağlantılı kullanıcıları yeniden atama yetkisi",
            "en": "Permission to delete system roles and reassign connected users",
        },
        "dev_notes": "DELETE /api/admin/roles/<name>; system default roles are refused",
        "dependencies": ["admin.roles.view"],
        "used_in": ["DeleteRoleDialog", "/api/admin/roles/[name] (DELETE)"],
    },
    {
        "name": "roles.assign-permissions",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "roles",
        "action": PermissionAction.MANAGE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Rol Yetki Atama", "en": "Assign Role Permissions"},
        "description": {
            "tr": "Rollere yetki atama ve permission matrisi yönetme yetkisi",
            "en": "Permission to assign permissions to roles and manage permission matrix",
        },
        "dev_notes": "Grant, revoke and bulk replace under /api/admin/roles/<name>/permissions",
        "dependencies": ["admin.roles.view"],
        "used_in": ["RolePermissionMatrix", "/api/admin/roles/[name]/permissions"],
    },

    # Customers
    {
        "name": "customers.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "customers",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Müşteri Oluşturma", "en": "Create Customer"},
        "description": {
            "tr": "Yeni müşteri oluşturma ve temel bilgileri kaydetme yetkisi",
            "en": "Permission to create new customers and save basic information",
        },
        "dev_notes": "POST /api/admin/customers",
        "dependencies": ["admin.customers.view"],
        "used_in": ["CustomerCreateDialog", "/api/admin/customers (POST)"],
    },
    {
        "name": "customers.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "customers",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Müşteri Güncelleme", "en": "Update Customer"},
        "description": {
            "tr": "Mevcut müşteri bilgilerini güncelleme yetkisi",
            "en": "Permission to update existing customer information",
        },
        "dev_notes": "PUT /api/admin/customers/<id>",
        "dependencies": ["admin.customers.view"],
        "used_in": ["CustomerEditDialog", "/api/admin/customers/[id] (PUT)"],
    },
    {
        "name": "customers.delete",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "customers",
        "action": PermissionAction.DELETE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Müşteri Silme", "en": "Delete Customer"},
        "description": {
            "tr": "Müşteri kaydını silme yetkisi",
            "en": "Permission to delete customer records",
        },
        "dev_notes": "DELETE /api/admin/customers/<id>",
        "dependencies": ["admin.customers.view"],
        "used_in": ["CustomerDeleteDialog", "/api/admin/customers/[id] (DELETE)"],
    },

    # Profiles
    {
        "name": "admin.profile.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "profile",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.ADMIN,
        "display_name": {"tr": "Admin Profil Güncelleme", "en": "Update Admin Profile"},
        "description": {
            "tr": "Kendi admin profil bilgilerini (isim, e-posta) güncelleme yetkisi.",
            "en": "Permission to update own admin profile information (name, email).",
        },
        "dev_notes": "PUT /api/admin/profile; password change is a separate permission",
        "dependencies": ["admin.profile.view"],
        "used_in": ["AdminProfileClient", "/api/admin/profile (PUT)", "ProfileDetails"],
    },
    {
        "name": "customer.profile.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "profile",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Müşteri Profil Güncelleme", "en": "Update Customer Profile"},
        "description": {
            "tr": "Kendi profil bilgilerini (isim, e-posta) güncelleme yetkisi.",
            "en": "Permission to update own profile information (name, email).",
        },
        "dev_notes": "PUT /api/customer/profile",
        "dependencies": ["customer.profile.view"],
        "used_in": ["CustomerProfileClient", "/api/customer/profile (PUT)"],
    },
    {
        "name": "customer.profile.change-password",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "profile",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Müşteri Şifre Değiştirme", "en": "Customer Change Password"},
        "description": {
            "tr": "Kendi şifresini değiştirme yetkisi.",
            "en": "Permission to change own password.",
        },
        "dev_notes": "POST /api/customer/profile/change-password",
        "dependencies": ["customer.profile.view"],
        "used_in": ["CustomerProfileClient", "/api/customer/profile/change-password (POST)"],
    },

    # Calendar
    {
        "name": "customer.calendar.create",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "calendar",
        "action": PermissionAction.CREATE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Takvim Etkinliği Oluşturma", "en": "Create Calendar Event"},
        "description": {
            "tr": "Kendi takvimine yeni etkinlik ekleme yetkisi.",
            "en": "Permission to add new events to own calendar.",
        },
        "dev_notes": "POST /api/customer/calendar",
        "dependencies": ["customer.calendar.view"],
        "used_in": ["CustomerCalendarClient", "/api/customer/calendar (POST)"],
    },
    {
        "name": "customer.calendar.update",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "calendar",
        "action": PermissionAction.UPDATE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Takvim Etkinliği Güncelleme", "en": "Update Calendar Event"},
        "description": {
            "tr": "Kendi takvimindeki etkinlikleri güncelleme yetkisi.",
            "en": "Permission to update events in own calendar.",
        },
        "dev_notes": "PUT /api/customer/calendar/<event_id>",
        "dependencies": ["customer.calendar.view"],
        "used_in": ["CustomerCalendarClient", "/api/customer/calendar/[eventId] (PUT)"],
    },
    {
        "name": "customer.calendar.delete",
        "category": PermissionCategory.FUNCTION,
        "resource_path": "calendar",
        "action": PermissionAction.DELETE,
        "permission_type": PermissionType.USER,
        "display_name": {"tr": "Takvim Etkinliği Silme", "en": "Delete Calendar Event"},
        "description": {
            "tr": "Kendi takvimindeki etkinlikleri silme yetkisi.",
            "en": "Permission to delete events from own calendar.",
        },
        "dev_notes": "DELETE /api/customer/calendar/<event_id>",
        "dependencies": ["customer.calendar.view"],
        "used_in": ["CustomerCalendarClient", "/api/customer/calendar/[eventId] (DELETE)"],
    },
]


PERMISSION_DEFINITIONS = LAYOUT_PERMISSIONS + VIEW_PERMISSIONS + FUNCTION_PERMISSIONS
