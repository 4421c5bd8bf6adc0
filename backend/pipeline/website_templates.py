"""
HTML/CSS/JS templates for generated product websites.

Two looks are available:
- modern: Tailwind CDN, purple/blue gradients, animated hero (USE_V0_STYLE)
- classic: hand-written CSS, no external framework

Templates are plain ``str.format`` strings; literal braces are doubled.
All values passed in must already be HTML-escaped.
"""

# Tailwind color family for each feature card, in order
FEATURE_COLORS = ["purple", "blue", "indigo", "violet"]


MODERN_FEATURE_CARD = """<div class="group p-6 bg-gradient-to-br from-{color}-50 to-white rounded-xl border-2 border-{color}-100 hover:border-{color}-300 hover:shadow-xl transition transform hover:scale-105">
                    <div class="w-14 h-14 bg-gradient-to-br from-{color}-500 to-{color}-600 rounded-xl flex items-center justify-center text-2xl mb-4 shadow-lg group-hover:scale-110 transition">
                        {icon}
                    </div>
                    <h3 class="text-lg font-bold mb-2">{title}</h3>
                    <p class="text-gray-600 text-sm leading-relaxed">{description}</p>
                </div>"""

MODERN_PRICE_BLOCK = """<div class="flex items-center space-x-3">
                        <span class="text-3xl font-black text-purple-600">{price}</span>
                        <span class="px-4 py-2 bg-green-100 text-green-700 rounded-lg font-bold">Limited Offer!</span>
                    </div>"""

MODERN_VIDEO_BLOCK = """<video id="demo-video" controls class="w-full rounded-2xl" poster="{image_url}">
                        <source src="{video_url}" type="video/mp4">
                        Your browser does not support the video tag.
                    </video>"""

MODERN_VIDEO_PLACEHOLDER = """<div class="p-8 text-center text-gray-500">
                        <p class="text-xl">Video coming soon...</p>
                    </div>"""


MODERN_INDEX_HTML = """<!DOCTYPE html>
<html lang="en" class="scroll-smooth">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="description" content="{description}">
    <title>{name} - Premium Product</title>
    <link rel="stylesheet" href="styles.css">
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;900&display=swap" rel="stylesheet">
    <script src="https://cdn.tailwindcss.com"></script>
    <script>
        tailwind.config = {{
            theme: {{
                extend: {{
                    colors: {{
                        primary: '#6366f1',
                        secondary: '#8b5cf6',
                    }}
                }}
            }}
        }}
    </script>
</head>
<body class="font-['Inter'] antialiased">

    <nav class="fixed top-0 left-0 right-0 z-50 bg-white/80 backdrop-blur-lg border-b border-gray-200 shadow-sm">
        <div class="container mx-auto px-6 py-4">
            <div class="flex items-center justify-between">
                <div class="flex items-center space-x-3">
                    <div class="w-10 h-10 bg-gradient-to-br from-purple-600 to-blue-600 rounded-lg flex items-center justify-center shadow-lg">
                        <span class="text-white font-bold text-xl">{initial}</span>
                    </div>
                    <span class="text-2xl font-bold bg-gradient-to-r from-purple-600 to-blue-600 bg-clip-text text-transparent">
                        {name}
                    </span>
                </div>
                <div class="hidden md:flex space-x-8">
                    <a href="#features" class="text-gray-700 hover:text-purple-600 font-medium transition">Features</a>
                    <a href="#video" class="text-gray-700 hover:text-purple-600 font-medium transition">Demo</a>
                    <a href="#pricing" class="text-gray-700 hover:text-purple-600 font-medium transition">Pricing</a>
                </div>
                <a href="#pricing" class="px-6 py-2 bg-gradient-to-r from-purple-600 to-blue-600 text-white rounded-lg font-semibold hover:shadow-lg transition transform hover:scale-105">
                    Get Started
                </a>
            </div>
        </div>
    </nav>

    <section class="relative pt-32 pb-20 px-6 overflow-hidden">
        <div class="absolute inset-0 bg-gradient-to-br from-purple-50 via-blue-50 to-indigo-50"></div>
        <div class="absolute inset-0 bg-grid-pattern opacity-10"></div>

        <div class="container mx-auto relative z-10">
            <div class="grid lg:grid-cols-2 gap-12 items-center">
                <div class="space-y-8 animate-fade-in">
                    <div class="inline-block px-4 py-2 bg-purple-100 rounded-full text-purple-600 font-semibold text-sm">
                        ✨ New Product Launch
                    </div>
                    <h1 class="text-5xl lg:text-6xl font-black leading-tight">
                        <span class="bg-gradient-to-r from-purple-600 to-blue-600 bg-clip-text text-transparent">
                            {name}
                        </span>
                    </h1>
                    <p class="text-xl text-gray-600 leading-relaxed">
                        {description}
                    </p>
                    <div class="flex flex-wrap gap-4">
                        <a href="#pricing" class="px-8 py-4 bg-gradient-to-r from-purple-600 to-blue-600 text-white rounded-xl font-bold hover:shadow-2xl transition transform hover:scale-105">
                            🚀 Get Started Now
                        </a>
                        <a href="#video" class="px-8 py-4 bg-white border-2 border-purple-600 text-purple-600 rounded-xl font-bold hover:bg-purple-50 transition">
                            📹 Watch Demo
                        </a>
                    </div>
                    {price_block}
                </div>
                <div class="relative animate-float">
                    <div class="absolute inset-0 bg-gradient-to-r from-purple-400 to-blue-400 rounded-3xl blur-3xl opacity-30"></div>
                    <img src="{image_url}" alt="{name}" class="relative z-10 w-full rounded-3xl shadow-2xl transform hover:scale-105 transition duration-500" id="product-image">
                </div>
            </div>
        </div>
    </section>

    <section id="features" class="py-20 px-6 bg-white">
        <div class="container mx-auto">
            <div class="text-center mb-16 space-y-4">
                <h2 class="text-4xl lg:text-5xl font-black">
                    Why Choose <span class="bg-gradient-to-r from-purple-600 to-blue-600 bg-clip-text text-transparent">{name}</span>?
                </h2>
                <p class="text-xl text-gray-600 max-w-2xl mx-auto">
                    Discover the features that make our product stand out from the competition
                </p>
            </div>

            <div class="grid grid-cols-1 md:grid-cols-2 lg:grid-cols-4 gap-6 max-w-7xl mx-auto">
                {features_html}
            </div>
        </div>
    </section>

    <section id="video" class="py-20 px-6 bg-gradient-to-br from-purple-50 via-blue-50 to-indigo-50">
        <div class="container mx-auto">
            <div class="text-center mb-16 space-y-4">
                <h2 class="text-4xl lg:text-5xl font-black">See It In Action</h2>
                <p class="text-xl text-gray-600 max-w-2xl mx-auto">
                    Watch our product demonstration and discover what makes it truly special
                </p>
            </div>
            <div class="max-w-4xl mx-auto">
                <div class="relative rounded-3xl overflow-hidden shadow-2xl bg-white p-2">
                    {video_html}
                </div>
            </div>
        </div>
    </section>

    <section id="pricing" class="py-20 px-6 bg-gradient-to-br from-purple-600 to-blue-600 text-white">
        <div class="container mx-auto text-center space-y-8">
            <h2 class="text-4xl lg:text-5xl font-black">Ready to Get Started?</h2>
            <p class="text-xl opacity-90 max-w-2xl mx-auto">
                Join thousands of satisfied customers who have already transformed their experience
            </p>
            <div class="flex flex-wrap gap-4 justify-center">
                <a href="#" class="px-8 py-4 bg-white text-purple-600 rounded-xl font-bold hover:shadow-2xl transition transform hover:scale-105">
                    🎯 Get Started Now
                </a>
                <a href="#" class="px-8 py-4 bg-transparent border-2 border-white text-white rounded-xl font-bold hover:bg-white hover:text-purple-600 transition">
                    💬 Contact Sales
                </a>
            </div>
        </div>
    </section>

    <footer class="bg-gray-900 text-white py-12 px-6">
        <div class="container mx-auto">
            <div class="grid md:grid-cols-4 gap-8 mb-8">
                <div class="space-y-4">
                    <h3 class="text-2xl font-bold">{name}</h3>
                    <p class="text-gray-400">Innovation at your fingertips</p>
                </div>
                <div>
                    <h4 class="font-bold mb-4">Product</h4>
                    <ul class="space-y-2 text-gray-400">
                        <li><a href="#features" class="hover:text-white transition">Features</a></li>
                        <li><a href="#video" class="hover:text-white transition">Demo</a></li>
                        <li><a href="#pricing" class="hover:text-white transition">Pricing</a></li>
                    </ul>
                </div>
                <div>
                    <h4 class="font-bold mb-4">Company</h4>
                    <ul class="space-y-2 text-gray-400">
                        <li><a href="#" class="hover:text-white transition">About</a></li>
                        <li><a href="#" class="hover:text-white transition">Contact</a></li>
                        <li><a href="#" class="hover:text-white transition">Blog</a></li>
                    </ul>
                </div>
                <div>
                    <h4 class="font-bold mb-4">Connect</h4>
                    <div class="flex space-x-4">
                        <a href="#" class="w-10 h-10 bg-gray-800 rounded-lg flex items-center justify-center hover:bg-purple-600 transition">📱</a>
                        <a href="#" class="w-10 h-10 bg-gray-800 rounded-lg flex items-center justify-center hover:bg-purple-600 transition">🐦</a>
                        <a href="#" class="w-10 h-10 bg-gray-800 rounded-lg flex items-center justify-center hover:bg-purple-600 transition">💼</a>
                    </div>
                </div>
            </div>
            <div class="border-t border-gray-800 pt-8 text-center text-gray-400">
                <p>&copy; {year} {name}. All rights reserved.</p>
            </div>
        </div>
    </footer>

    <script src="script.js"></script>
</body>
</html>
"""


MODERN_STYLES_CSS = """/* Generated product page */
@keyframes fade-in {
    from { opacity: 0; transform: translateY(20px); }
    to { opacity: 1; transform: translateY(0); }
}

@keyframes float {
    0%, 100% { transform: translateY(0); }
    50% { transform: translateY(-20px); }
}

.animate-fade-in {
    animation: fade-in 1s ease-out;
}

.animate-float {
    animation: float 6s ease-in-out infinite;
}

.bg-grid-pattern {
    background-image:
        linear-gradient(to right, rgba(99, 102, 241, 0.1) 1px, transparent 1px),
        linear-gradient(to bottom, rgba(99, 102, 241, 0.1) 1px, transparent 1px);
    background-size: 40px 40px;
}

.reveal {
    opacity: 0;
    transform: translateY(30px);
    transition: opacity 0.8s ease-out, transform 0.8s ease-out;
}

.reveal.visible {
    opacity: 1;
    transform: translateY(0);
}

::-webkit-scrollbar {
    width: 10px;
}

::-webkit-scrollbar-track {
    background: #f1f1f1;
}

::-webkit-scrollbar-thumb {
    background: linear-gradient(to bottom, #9333ea, #2563eb);
    border-radius: 5px;
}
"""


MODERN_SCRIPT_JS = """// Generated product page
document.addEventListener('DOMContentLoaded', function () {
    document.querySelectorAll('a[href^="#"]').forEach(function (anchor) {
        anchor.addEventListener('click', function (e) {
            var target = document.querySelector(this.getAttribute('href'));
            if (target) {
                e.preventDefault();
                target.scrollIntoView({ behavior: 'smooth', block: 'start' });
            }
        });
    });

    var observer = new IntersectionObserver(function (entries) {
        entries.forEach(function (entry) {
            if (entry.isIntersecting) {
                entry.target.classList.add('visible');
            }
        });
    }, { threshold: 0.1, rootMargin: '0px 0px -50px 0px' });

    document.querySelectorAll('section').forEach(function (section) {
        section.classList.add('reveal');
        observer.observe(section);
    });

    var video = document.getElementById('demo-video');
    if (video) {
        video.addEventListener('play', function () {
            console.log('Demo video started');
        });
    }

    var productImage = document.getElementById('product-image');
    if (productImage) {
        window.addEventListener('scroll', function () {
            var offset = window.pageYOffset;
            productImage.style.transform = 'translateY(' + offset * 0.1 + 'px)';
        });
    }
});
"""


CLASSIC_FEATURE_CARD = """<div class="feature-card">
                    <div class="feature-icon">{icon}</div>
                    <h3>{title}</h3>
                    <p>{description}</p>
                </div>"""

CLASSIC_PRICE_BLOCK = """<p class="cta-price">Only {price}</p>"""

CLASSIC_VIDEO_BLOCK = """<video controls class="demo-video" poster="{image_url}">
                    <source src="{video_url}" type="video/mp4">
                    Your browser does not support the video tag.
                </video>"""

CLASSIC_VIDEO_PLACEHOLDER = """<p class="video-placeholder">Video coming soon...</p>"""


CLASSIC_INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="description" content="{description}">
    <title>{name} - Official Product Page</title>
    <link rel="stylesheet" href="styles.css">
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;600;700;900&display=swap" rel="stylesheet">
</head>
<body>
    <section class="hero">
        <nav class="navbar">
            <div class="container">
                <div class="logo">{name}</div>
                <ul class="nav-menu">
                    <li><a href="#features">Features</a></li>
                    <li><a href="#video">Watch Demo</a></li>
                    <li><a href="#cta">Get Started</a></li>
                </ul>
            </div>
        </nav>

        <div class="hero-content container">
            <div class="hero-text">
                <h1 class="hero-title">{name}</h1>
                <p class="hero-description">{description}</p>
                <div class="hero-cta">
                    <a href="#video" class="btn btn-primary">Watch Demo</a>
                    <a href="#cta" class="btn btn-secondary">Learn More</a>
                </div>
            </div>
            <div class="hero-image">
                <img src="{image_url}" alt="{name}" class="product-showcase">
            </div>
        </div>
    </section>

    <section id="features" class="features">
        <div class="container">
            <h2 class="section-title">Why Choose {name}?</h2>
            <div class="features-grid">
                {features_html}
            </div>
        </div>
    </section>

    <section id="video" class="video-section">
        <div class="container">
            <h2 class="section-title">See It In Action</h2>
            <div class="video-wrapper">
                {video_html}
            </div>
        </div>
    </section>

    <section id="cta" class="cta-section">
        <div class="container">
            <h2>Ready to Transform Your Experience?</h2>
            {price_block}
            <a href="#" class="btn btn-primary btn-large">Get Started Today</a>
        </div>
    </section>

    <footer class="footer">
        <div class="container">
            <p>&copy; {year} {name}. All rights reserved.</p>
        </div>
    </footer>

    <script src="script.js"></script>
</body>
</html>
"""


CLASSIC_STYLES_CSS = """* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}

body {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
    color: #1a1a2e;
    line-height: 1.6;
}

.container {
    max-width: 1200px;
    margin: 0 auto;
    padding: 0 24px;
}

.hero {
    min-height: 100vh;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: #fff;
}

.navbar .container {
    display: flex;
    justify-content: space-between;
    align-items: center;
    padding: 24px;
}

.logo {
    font-size: 1.5rem;
    font-weight: 900;
}

.nav-menu {
    display: flex;
    gap: 32px;
    list-style: none;
}

.nav-menu a {
    color: #fff;
    text-decoration: none;
    font-weight: 600;
}

.hero-content {
    display: grid;
    grid-template-columns: 1fr 1fr;
    gap: 48px;
    align-items: center;
    padding-top: 80px;
    padding-bottom: 80px;
}

.hero-title {
    font-size: 3.5rem;
    font-weight: 900;
    line-height: 1.1;
    margin-bottom: 24px;
}

.hero-description {
    font-size: 1.25rem;
    opacity: 0.9;
    margin-bottom: 32px;
}

.hero-cta {
    display: flex;
    gap: 16px;
}

.product-showcase {
    width: 100%;
    border-radius: 24px;
    box-shadow: 0 30px 60px rgba(0, 0, 0, 0.3);
}

.btn {
    display: inline-block;
    padding: 14px 32px;
    border-radius: 12px;
    font-weight: 700;
    text-decoration: none;
    transition: transform 0.2s ease;
}

.btn:hover {
    transform: translateY(-2px);
}

.btn-primary {
    background: #fff;
    color: #764ba2;
}

.btn-secondary {
    border: 2px solid #fff;
    color: #fff;
}

.btn-large {
    padding: 18px 48px;
    font-size: 1.1rem;
}

.section-title {
    text-align: center;
    font-size: 2.5rem;
    font-weight: 900;
    margin-bottom: 48px;
}

.features {
    padding: 96px 0;
}

.features-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(240px, 1fr));
    gap: 24px;
}

.feature-card {
    padding: 32px;
    border-radius: 16px;
    background: #f8f7ff;
    text-align: center;
}

.feature-icon {
    font-size: 2.5rem;
    margin-bottom: 16px;
}

.video-section {
    padding: 96px 0;
    background: #f3f4f6;
}

.video-wrapper {
    max-width: 900px;
    margin: 0 auto;
}

.demo-video {
    width: 100%;
    border-radius: 16px;
}

.video-placeholder {
    text-align: center;
    font-size: 1.25rem;
    color: #6b7280;
}

.cta-section {
    padding: 96px 0;
    text-align: center;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: #fff;
}

.cta-section h2 {
    font-size: 2.5rem;
    margin-bottom: 24px;
}

.cta-price {
    font-size: 2rem;
    font-weight: 900;
    margin-bottom: 24px;
}

.footer {
    padding: 32px 0;
    text-align: center;
    background: #1a1a2e;
    color: #9ca3af;
}

@media (max-width: 768px) {
    .hero-content {
        grid-template-columns: 1fr;
    }

    .nav-menu {
        display: none;
    }

    .hero-title {
        font-size: 2.5rem;
    }
}
"""


CLASSIC_SCRIPT_JS = """document.addEventListener('DOMContentLoaded', function () {
    document.querySelectorAll('a[href^="#"]').forEach(function (anchor) {
        anchor.addEventListener('click', function (e) {
            var target = document.querySelector(this.getAttribute('href'));
            if (target) {
                e.preventDefault();
                target.scrollIntoView({ behavior: 'smooth' });
            }
        });
    });
});
"""


TEMPLATES = {
    "modern": {
        "index": MODERN_INDEX_HTML,
        "feature_card": MODERN_FEATURE_CARD,
        "price_block": MODERN_PRICE_BLOCK,
        "video_block": MODERN_VIDEO_BLOCK,
        "video_placeholder": MODERN_VIDEO_PLACEHOLDER,
        "styles": MODERN_STYLES_CSS,
        "script": MODERN_SCRIPT_JS,
    },
    "classic": {
        "index": CLASSIC_INDEX_HTML,
        "feature_card": CLASSIC_FEATURE_CARD,
        "price_block": CLASSIC_PRICE_BLOCK,
        "video_block": CLASSIC_VIDEO_BLOCK,
        "video_placeholder": CLASSIC_VIDEO_PLACEHOLDER,
        "styles": CLASSIC_STYLES_CSS,
        "script": CLASSIC_SCRIPT_JS,
    },
}
