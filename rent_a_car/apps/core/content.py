"""
Static copy for the about and contact pages.
"""

ABOUT = {
    'title': 'About Us',
    'description': (
        "RentACar is your trusted partner for affordable and convenient car rentals across "
        "Europe. Since 2015, we've been committed to providing exceptional service and premium "
        "vehicles to thousands of satisfied customers."
    ),
    'mission': (
        "Our mission is to make car rental simple, affordable, and accessible to everyone. "
        "We believe that reliable transportation should never be complicated."
    ),
    'vision': (
        "We envision a future where renting a car is as easy as booking a hotel room, with "
        "transparent pricing, excellent service, and a diverse fleet of well-maintained vehicles."
    ),
    'values': [
        ('Customer First', "We prioritize our customers' needs and satisfaction above everything else."),
        ('Transparency', 'No hidden fees, no surprises. We believe in honest and straightforward pricing.'),
        ('Quality', 'Our fleet is regularly maintained to ensure safety and comfort on every journey.'),
        ('Innovation', 'We continuously improve our services with the latest technology.'),
    ],
    'achievements': [
        ('50,000+', 'Happy Customers'),
        ('25+', 'Countries'),
        ('200+', 'Locations'),
        ('4.8/5', 'Average Rating'),
    ],
}

CONTACT = {
    'title': 'Contact Us',
    'description': (
        "Have questions? We'd love to hear from you. Get in touch with our team and we'll "
        "respond as soon as possible."
    ),
    'offices': [
        {
            'location': 'Head Office - Split, Croatia',
            'address': '123 Dalmatinska Street, 21000 Split, Croatia',
            'phone': '+385 21 555 0123',
            'email': 'st.info@rentacar.com',
            'hours': 'Monday - Friday: 9:00 AM - 6:00 PM, Saturday: 10:00 AM - 4:00 PM',
        },
        {
            'location': 'Additional Office - Zagreb, Croatia',
            'address': '456 Ilica Street, 10000 Zagreb, Croatia',
            'phone': '+385 1 2110 5555',
            'email': 'zg.info@rentacar.com',
            'hours': 'Monday - Friday: 8:00 AM - 5:00 PM',
        },
        {
            'location': 'Customer Support',
            'address': 'Available 24/7',
            'phone': '+385 21 555 9999',
            'email': 'support@rentacar.com',
            'hours': '24/7 Emergency Support Available',
        },
    ],
    'faq': [
        ("What documents do I need to rent a car?",
         "A valid driver's license held for at least 2 years, a major credit card, and a valid passport or ID."),
        ("What is your cancellation policy?",
         "Free cancellation up to 24 hours before your rental start time."),
        ("Can I extend my rental?",
         "Yes, online or by contacting us, subject to vehicle availability."),
    ],
}
