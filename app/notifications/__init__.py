"""
Notifications app: push token registration.

Delivery of push notifications belongs to an external gateway that reads
User.expo_push_token. This app only exposes the register/unregister
endpoints backed by notifications.services.DeviceTokenService.
"""
