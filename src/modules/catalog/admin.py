from django.contrib import admin

from modules.catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug"]
    prepopulated_fields = {"slug": ["name"]}
    search_fields = ["name"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "category", "price", "status"]
    list_filter = ["status", "category"]
    prepopulated_fields = {"slug": ["name"]}
    search_fields = ["name", "description"]
