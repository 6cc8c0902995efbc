# Built-in sketches used when AI_MOCK_FALLBACK is enabled and the gateway fails.
MOCK_DRAWINGS = {
    "cat": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><path d="M100 250 Q 80 150 150 150 Q 180 150 200 180 Q 220 150 250 150 Q 320 150 300 250" stroke="black" fill="transparent" stroke-width="5" /><circle cx="150" cy="200" r="10" fill="black" /><circle cx="250" cy="200" r="10" fill="black" /><path d="M180 250 Q 200 270 220 250" stroke="black" fill="transparent" stroke-width="5" /></svg>',
    "dog": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><ellipse cx="200" cy="200" rx="100" ry="120" stroke="black" fill="none" stroke-width="5"/><circle cx="170" cy="180" r="10"/><circle cx="230" cy="180" r="10"/><path d="M180 250 Q 200 280 220 250" stroke="black" fill="none" stroke-width="5"/></svg>',
    "sun": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><circle cx="200" cy="200" r="80" stroke="orange" fill="yellow" stroke-width="5"/><line x1="200" y1="100" x2="200" y2="50" stroke="orange" stroke-width="5"/><line x1="200" y1="300" x2="200" y2="350" stroke="orange" stroke-width="5"/><line x1="100" y1="200" x2="50" y2="200" stroke="orange" stroke-width="5"/><line x1="300" y1="200" x2="350" y2="200" stroke="orange" stroke-width="5"/></svg>',
    "tree": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><rect x="180" y="250" width="40" height="100" fill="brown"/><circle cx="200" cy="180" r="80" fill="green"/></svg>',
    "house": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><rect x="100" y="200" width="200" height="150" fill="none" stroke="black" stroke-width="5"/><polyline points="100,200 200,100 300,200" fill="none" stroke="black" stroke-width="5"/><rect x="180" y="280" width="40" height="70" stroke="black" fill="none"/></svg>',
    "car": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><path d="M50 250 L350 250 L350 200 L280 150 L120 150 L50 200 Z" fill="none" stroke="black" stroke-width="5"/><circle cx="100" cy="250" r="30" stroke="black" fill="gray"/><circle cx="300" cy="250" r="30" stroke="black" fill="gray"/></svg>',
    "robot": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><rect x="150" y="100" width="100" height="100" fill="none" stroke="gray" stroke-width="5"/><rect x="130" y="200" width="140" height="150" fill="none" stroke="gray" stroke-width="5"/><circle cx="180" cy="140" r="10" fill="red"/><circle cx="220" cy="140" r="10" fill="red"/></svg>',
    "alien": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><ellipse cx="200" cy="150" rx="60" ry="80" fill="none" stroke="green" stroke-width="5"/><circle cx="180" cy="140" r="15" fill="black"/><circle cx="220" cy="140" r="15" fill="black"/><path d="M150 250 Q 200 300 250 250" fill="none" stroke="green" stroke-width="5"/></svg>',
    "pizza": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><path d="M200 50 L350 350 L50 350 Z" fill="yellow" stroke="orange" stroke-width="5"/><circle cx="200" cy="150" r="20" fill="red"/><circle cx="150" cy="250" r="20" fill="red"/><circle cx="250" cy="250" r="20" fill="red"/></svg>',
    "dragon": '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg"><path d="M100 200 Q 150 100 200 200 T 300 200" fill="none" stroke="red" stroke-width="5"/><path d="M100 200 L 80 150 M 300 200 L 320 150" stroke="red" stroke-width="5"/></svg>',
}
