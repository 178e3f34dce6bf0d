"""Catalog DRF serializers (read-only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import Category, Product


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    category_slug = serializers.CharField(source="category.slug", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "category_id",
            "category_slug",
            "name",
            "slug",
            "description",
            "price",
            "image_url",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
