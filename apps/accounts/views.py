from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from apps.utils.throttle import AuthRateThrottle

from .serializers import RegisterSerializer, RoleTokenObtainPairSerializer, UserSerializer
from .services import AuthService, DashboardService


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthRateThrottle]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(**serializer.validated_data)

        return Response({
            "refresh": result["refresh"],
            "access": result["access"],
            "user": UserSerializer(result["user"]).data,
        }, status=status.HTTP_201_CREATED)


class LoginView(TokenObtainPairView):
    serializer_class = RoleTokenObtainPairSerializer
    throttle_classes = [AuthRateThrottle]


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        serializer = UserSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class DashboardView(APIView):
    """
    GET /api/v1/accounts/dashboard/
    Buyer feed, seller stats (ya onboarding flag) ya admin stats - role ke hisaab se.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(DashboardService.for_user(request.user))
