# Services: store, geolocation, GitHub client, cache, quotes
