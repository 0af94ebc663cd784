import logging

from django.contrib.auth import get_user_model
from django.db.models import F
from django_filters import rest_framework as filters
from rest_framework import generics, permissions, status
from rest_framework.filters import SearchFilter
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .serializers import (
    UserRegistrationSerializer,
    UserSerializer,
    VeterinarianSerializer,
    CustomTokenObtainPairSerializer,
    ChangePasswordSerializer,
)
from .services import UserDirectory

logger = logging.getLogger(__name__)

User = get_user_model()


class UserRegistrationView(generics.CreateAPIView):
    """
    API endpoint for user registration.
    No authentication required.
    """
    serializer_class = UserRegistrationSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered {user.role} {user.email}")

        # Generate tokens for the new user
        refresh = RefreshToken.for_user(user)

        return Response({
            'success': True,
            'message': 'User registered successfully',
            'data': {
                'user': UserSerializer(user).data,
                'tokens': {
                    'refresh': str(refresh),
                    'access': str(refresh.access_token),
                }
            }
        }, status=status.HTTP_201_CREATED)


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Login with email + password; returns a JWT pair and the user record.
    """
    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        data = dict(response.data)
        user = data.pop('user', None)
        response.data = {
            'success': True,
            'message': 'Login successful',
            'data': {
                'user': user,
                'tokens': data,
            }
        }
        return response


class UserProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for retrieving and updating the caller's profile.
    Requires authentication.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        return Response({
            'success': True,
            'data': self.get_serializer(self.get_object()).data
        })

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({
            'success': True,
            'message': 'Profile updated successfully',
            'data': serializer.data
        })


class ChangePasswordView(APIView):
    """
    POST /api/auth/change-password/

    Issued tokens stay valid until they expire.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data['newPassword'])
        user.save(update_fields=['password', 'updated_at'])
        logger.info(f"Password changed for {user.email}")

        return Response({
            'success': True,
            'message': 'Password changed successfully'
        })


class VeterinarianFilter(filters.FilterSet):
    """Query filters for the veterinarian directory."""
    district = filters.CharFilter(field_name='location', lookup_expr='icontains')
    specialty = filters.CharFilter(field_name='specialty', lookup_expr='icontains')

    class Meta:
        model = User
        fields = ['district', 'specialty']


class VeterinarianListView(generics.ListAPIView):
    """
    Directory of active veterinarians, best rated first.

    Query params:
        district: matches the vet's location (case-insensitive)
        specialty: case-insensitive substring
        search: name, specialty or location
    """
    serializer_class = VeterinarianSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [filters.DjangoFilterBackend, SearchFilter]
    filterset_class = VeterinarianFilter
    search_fields = ['first_name', 'last_name', 'specialty', 'location']
    pagination_class = None

    def get_queryset(self):
        return UserDirectory.veterinarians().order_by(
            F('rating').desc(nulls_last=True), 'first_name', 'last_name'
        )

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({
            'success': True,
            'count': len(serializer.data),
            'data': serializer.data
        })


class VeterinarianDetailView(APIView):
    """Single veterinarian directory entry."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, vet_id):
        vet = UserDirectory.get_veterinarian(vet_id)
        return Response({
            'success': True,
            'data': VeterinarianSerializer(vet).data
        })


class VeterinarianFacetsView(APIView):
    """Distinct specialties and locations for the directory search form."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        vets = UserDirectory.veterinarians()
        specialties = sorted(
            value for value in vets.order_by().values_list('specialty', flat=True).distinct() if value
        )
        locations = sorted(
            value for value in vets.order_by().values_list('location', flat=True).distinct() if value
        )
        return Response({
            'success': True,
            'data': {
                'specialties': specialties,
                'locations': locations,
            }
        })
