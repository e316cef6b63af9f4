from rest_framework import serializers


class ParcelStatusResponseSerializer(serializers.Serializer):
    sold = serializers.ListField(child=serializers.CharField())
    reserved = serializers.ListField(child=serializers.CharField())


class AvailableCountsSerializer(serializers.Serializer):
    goal = serializers.IntegerField()
    penalty = serializers.IntegerField()
    kickoff = serializers.IntegerField()
    field = serializers.IntegerField()


class ParcelSummaryResponseSerializer(serializers.Serializer):
    available = AvailableCountsSerializer()


class ParcelTypeInfoSerializer(serializers.Serializer):
    type = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    total = serializers.IntegerField()


class ParcelCatalogResponseSerializer(serializers.Serializer):
    gridCols = serializers.IntegerField()
    gridRows = serializers.IntegerField()
    goalParcelsPerSide = serializers.IntegerField()
    types = ParcelTypeInfoSerializer(many=True)
